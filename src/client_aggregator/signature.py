"""Ruby method signature parsing.

Only the method name and the raw parameter text are recovered. The parameter
text is kept byte-for-byte so it can be reused as call arguments.
"""

import re
from typing import NamedTuple

_SIGNATURE_WITH_PARENS = re.compile(r"^def\s+([^(]+)\((.*)\)")
_SIGNATURE_WITHOUT_PARENS = re.compile(r"^def\s+([^(]+)\s*$")
_DEFINITION_PREFIX = re.compile(r"^def\s+")


class ParsedSignature(NamedTuple):
    """Name and parameter text of a `def` line."""

    name: str
    parameter_list: str
    recognised: bool


def parse_signature(signature: str) -> ParsedSignature:
    """Split a trimmed `def` line into method name and parameter list.

    Shapes handled:
    - ``def name(params)``: parameters are everything up to the last ``)``
    - ``def name``: no parameters
    - anything else: the text after ``def`` becomes the name, parameters are
      empty and the result is flagged as not recognised

    Args:
        signature: Trimmed method definition line

    Returns:
        ParsedSignature with the name, parameter text and recognition flag

    """
    match = _SIGNATURE_WITH_PARENS.match(signature)
    if match:
        return ParsedSignature(match.group(1).strip(), match.group(2).strip(), True)

    match = _SIGNATURE_WITHOUT_PARENS.match(signature)
    if match:
        return ParsedSignature(match.group(1).strip(), "", True)

    return ParsedSignature(_DEFINITION_PREFIX.sub("", signature, count=1), "", False)
