import re

# one record per <code2>..</code2><code3>..</code3><code>..</code> block
CALLING_CODE_PATTERN = (
    r"<code2>\s*(?P<code2>[A-Za-z]{2})\s*</code2>\s*"
    r"<code3>\s*(?P<code3>[A-Za-z]{3})\s*</code3>\s*"
    r"<code>\s*(?P<code>[0-9][0-9 \-]*?)\s*</code>"
)

MATCH_FLAGS = re.DOTALL | re.MULTILINE
