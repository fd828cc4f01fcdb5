from dataclasses import dataclass

from lc3vm.common.ops import Opcode
from lc3vm.common.hwconf import WORD_MASK


def sign_extend(field: int, bit_count: int) -> int:
    if (field >> (bit_count - 1)) & 1:
        field |= (WORD_MASK << bit_count) & WORD_MASK

    return field


def bits(word: int, high: int, low: int) -> int:
    return (word >> low) & ((1 << (high - low + 1)) - 1)


@dataclass(frozen=True)
class Instruction:
    '''
    A fetched instruction word.

    Fields are extracted on access, so each property is only meaningful
    for the opcodes whose layout defines it:

      ADD/AND            dr, sr1, imm_mode, sr2 | imm5
      NOT                dr, sr1
      BR                 cond, pc_offset9
      JMP                base_r
      JSR                jsr_mode, base_r | pc_offset11
      LD/LDI/ST/STI/LEA  dr (sr for stores), pc_offset9
      LDR/STR            dr (sr for stores), base_r, offset6
      TRAP               trap_vector

    Offsets are returned sign-extended to 16 bits.
    '''
    word: int

    @property
    def opcode(self) -> Opcode:
        return Opcode(self.word >> 12)

    @property
    def dr(self) -> int:
        return bits(self.word, 11, 9)

    # Stores name the same field a source register
    sr = dr

    @property
    def sr1(self) -> int:
        return bits(self.word, 8, 6)

    base_r = sr1

    @property
    def sr2(self) -> int:
        return bits(self.word, 2, 0)

    @property
    def imm_mode(self) -> bool:
        return bool(bits(self.word, 5, 5))

    @property
    def imm5(self) -> int:
        return sign_extend(bits(self.word, 4, 0), 5)

    @property
    def offset6(self) -> int:
        return sign_extend(bits(self.word, 5, 0), 6)

    @property
    def pc_offset9(self) -> int:
        return sign_extend(bits(self.word, 8, 0), 9)

    @property
    def pc_offset11(self) -> int:
        return sign_extend(bits(self.word, 10, 0), 11)

    @property
    def cond(self) -> int:
        return bits(self.word, 11, 9)

    @property
    def jsr_mode(self) -> bool:
        return bool(bits(self.word, 11, 11))

    @property
    def trap_vector(self) -> int:
        return bits(self.word, 7, 0)


def decode(word: int) -> Instruction:
    return Instruction(word & WORD_MASK)
