"""
Error reporting for the Monkey interpreter
Syntax errors and evaluation errors travel as values inside the core; the
exceptions here are raised only at the boundaries (parser/interpreter facades)
and formatted for the command line.
"""

from typing import Dict, List, Optional


MONKEY_FACE = r"""            __,__
   .--.  .-"     "-.  .--.
  / .. \/  .-. .-.  \/ .. \
 | |  '|  /   Y   \  |'  | |
 | \   \  \ 0 | 0 /  /   / |
  \ '- ,\.-""" + '"' * 7 + r"""-./, -' /
   ''-' /_   ^ ^   _\ '-''
       |  \._   _./  |
       \   \ '~' /   /
        '._ '-=-' _.'
           '-----'
"""


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_error_report(kind: str, messages: List[str], filename: Optional[str] = None) -> Dict:
    """Create an immutable error report structure"""
    return {
        'kind': kind,
        'messages': list(messages),
        'filename': filename,
    }


# ============================================================================
# PURE FUNCTIONS
# ============================================================================

def format_parse_errors(report: Dict, banner: bool = False) -> str:
    """Format a syntax error report: heading plus one tab-indented line per error"""
    text = MONKEY_FACE if banner else ""
    text += "Woops! We ran into some monkey business here!\n"
    if report['filename']:
        text += f" in {report['filename']}\n"
    text += " parser errors:\n"
    for message in report['messages']:
        text += f"\t{message}\n"
    return text


def format_runtime_error(report: Dict) -> str:
    """Format an evaluation error report the way the REPL prints Error values"""
    location = f"{report['filename']}: " if report['filename'] else ""
    return "\n".join(f"{location}ERROR: {message}" for message in report['messages'])


# ============================================================================
# BOUNDARY EXCEPTIONS
# ============================================================================

class MonkeyParseError(Exception):
    """Raised by the parser facade when a source text has syntax errors"""
    def __init__(self, errors: List[str], filename: Optional[str] = None):
        self.errors = list(errors)
        self.filename = filename
        super().__init__("; ".join(self.errors))

    def report(self) -> Dict:
        return make_error_report("parse", self.errors, self.filename)

    def __str__(self) -> str:
        return format_parse_errors(self.report())


class MonkeyRuntimeError(Exception):
    """Raised by the interpreter facade when evaluation yields an Error value"""
    def __init__(self, message: str, filename: Optional[str] = None):
        self.message = message
        self.filename = filename
        super().__init__(message)

    def report(self) -> Dict:
        return make_error_report("runtime", [self.message], self.filename)

    def __str__(self) -> str:
        return format_runtime_error(self.report())
