MEMORY_SIZE      = 0x10000
WORD_MASK        = 0xFFFF
SIGN_BIT         = 0x8000

GP_REGS          = 8
LINK_REG         = 7            # R7 receives return addresses (JSR, TRAP)

PC_START         = 0x3000       # Programs are expected to start here

KBSR             = 0xFE00       # keyboard status, bit 15 set when a byte is ready
KBDR             = 0xFE02       # keyboard data
KBSR_READY       = 0x8000

IN_PROMPT        = 'Enter a character: '
HALT_MESSAGE     = 'HALT\n'
