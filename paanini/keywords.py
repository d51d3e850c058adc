"""Keywords and fixed texts of the Paanini language."""

PRINT_KEYWORD = 'दर्श'
IF_KEYWORD = 'यदि'
ELSE_KEYWORD = 'अन्यथा'
WHILE_KEYWORD = 'यावत्'
FOR_KEYWORD = 'परिभ्रमण'
FUNCTION_KEYWORD = 'कार्य'
RANGE_KEYWORD = 'परिधि'
TRUE_KEYWORD = 'सत्य'
FALSE_KEYWORD = 'असत्य'
IN_KEYWORD = 'in'
HELP_COMMAND = 'help'

NULL_DISPLAY = 'null'

# Comment lines start with either marker.
COMMENT_PREFIXES = ('!!', '#')

BLOCK_INTRODUCER = ':'
BLOCK_OPEN = '{'
BLOCK_CLOSE = '}'

# A single while-loop never runs its body more often than this.
LOOP_GUARD = 10000

VERSION = '0.1.0'

HELP_TEXT = (
    "Paanini आज्ञाः (Python-रूपेण):\n"
    "  x = 5\n"
    "  नाम = \"नमस्ते\"\n"
    "  दर्श(expr)\n"
    "  यदि x == 5:\n"
    "    दर्श(\"सत्यं\")\n"
    "  अन्यथा:\n"
    "    दर्श(\"असत्यं\")\n"
    "  यावत् x < 5:\n"
    "    दर्श(x)\n"
    "    x = x + 1\n"
    "  परिभ्रमण i in परिधि(5):\n"
    "    दर्श(i)\n"
    "  कार्य greet(नाम):\n"
    "    दर्श(\"नमस्ते \" + नाम)\n"
    "  greet(\"विश्व\")\n"
    "  !! टिप्पण्यः\n"
)


def is_comment_or_blank(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIXES)
