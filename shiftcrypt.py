import sys
import argparse
import string
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, NamedTuple, Optional

__version__ = "1.0.0"

# Verbose mode (disabled by default, enabled with --verbose)
VERBOSE = False

def log_info(msg: str):
    """Print info message only if verbose mode is enabled."""
    if VERBOSE:
        print(f"[INFO] {msg}", file=sys.stderr)

def log_warn(msg: str):
    """Print warning message only if verbose mode is enabled."""
    if VERBOSE:
        print(f"[WARN] {msg}", file=sys.stderr)

# ==========================================
#  ERRORS
# ==========================================

class ShiftCryptError(Exception):
    """Base class for every error reported by the tool."""

class UnknownAlgorithmError(ShiftCryptError):
    def __init__(self, name: Optional[str]):
        self.name = name
        super().__init__(f"Invalid -alg operation: {name!r}.")

class UnknownModeError(ShiftCryptError):
    def __init__(self, mode):
        self.mode = mode
        super().__init__(f"Invalid -mode operation: {mode!r}.")

class InputFileReadError(ShiftCryptError):
    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Trouble reading {path}: {reason}")

class OutputFileWriteError(ShiftCryptError):
    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Trouble writing to {path}: {reason}")

# ==========================================
#  FRAMEWORK: Abstract Base Class & Registry
# ==========================================

class Mode(Enum):
    ENCRYPT = "enc"
    DECRYPT = "dec"

    @classmethod
    def parse(cls, value) -> "Mode":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownModeError(value) from None


class CipherStrategy(ABC):
    """Abstract base class that all ciphers must implement."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The command-line name for this cipher."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Short description for help text."""
        pass

    @abstractmethod
    def encrypt(self, text: str, key: int) -> str:
        pass

    @abstractmethod
    def decrypt(self, text: str, key: int) -> str:
        pass

CIPHER_REGISTRY = {}

def register_cipher(cls):
    """Decorator to auto-register ciphers."""
    cipher = cls()
    CIPHER_REGISTRY[cipher.name] = cipher
    return cls

def resolve(name: Optional[str]) -> CipherStrategy:
    """Look up a registered cipher by its command-line name."""
    try:
        return CIPHER_REGISTRY[name]
    except (KeyError, TypeError):
        raise UnknownAlgorithmError(name) from None

# ==========================================
#  METHOD 1: Unicode (code point offset)
# ==========================================

@register_cipher
class CodePointShiftCipher(CipherStrategy):
    """
    Moves every character by `key` code points.

    Shifting runs over the Unicode scalar values only: the surrogate block
    is left out of the ring and both ends wrap, so any key on any text gives
    a UTF-8 encodable result (control and unassigned code points included)
    and decrypt always restores the input.
    Lone surrogates in the input are copied through untouched.
    """

    name = "unicode"
    description = "Adds the key to every character's code point (wraps at U+10FFFF)."

    SURROGATE_LOW = 0xD800
    SURROGATE_HIGH = 0xDFFF
    SURROGATE_SPAN = SURROGATE_HIGH - SURROGATE_LOW + 1
    RING_SIZE = 0x110000 - SURROGATE_SPAN

    def _to_index(self, code: int) -> int:
        return code if code < self.SURROGATE_LOW else code - self.SURROGATE_SPAN

    def _from_index(self, index: int) -> int:
        return index if index < self.SURROGATE_LOW else index + self.SURROGATE_SPAN

    def _shift_char(self, c: str, key: int) -> str:
        code = ord(c)
        if self.SURROGATE_LOW <= code <= self.SURROGATE_HIGH:
            return c
        index = (self._to_index(code) + key) % self.RING_SIZE
        return chr(self._from_index(index))

    def encrypt(self, text: str, key: int) -> str:
        return "".join(self._shift_char(c, key) for c in text)

    def decrypt(self, text: str, key: int) -> str:
        return "".join(self._shift_char(c, -key) for c in text)

# ==========================================
#  METHOD 2: Shift (Caesar)
# ==========================================

@register_cipher
class AlphabetShiftCipher(CipherStrategy):
    """
    Caesar shift over the 26 ASCII letters.

    Lower and upper case rotate inside their own alphabet; digits,
    punctuation, whitespace and non-ASCII text are left as they are.
    """

    name = "shift"
    description = "Caesar shift of ASCII letters; case and other characters preserved."

    LOWER = string.ascii_lowercase
    UPPER = string.ascii_uppercase

    def _shift_char(self, c: str, key: int) -> str:
        for alphabet in (self.LOWER, self.UPPER):
            idx = alphabet.find(c)
            if idx != -1:
                # Python's % already yields a residue in [0, 26) for negative keys
                return alphabet[(idx + key) % len(alphabet)]
        return c

    def encrypt(self, text: str, key: int) -> str:
        return "".join(self._shift_char(c, key) for c in text)

    def decrypt(self, text: str, key: int) -> str:
        return "".join(self._shift_char(c, -key) for c in text)

# ==========================================
#  TRANSFORM
# ==========================================

class TransformRequest(NamedTuple):
    """One resolved invocation. Field defaults are the CLI defaults."""
    mode: str = Mode.ENCRYPT.value
    cipher_name: Optional[str] = None
    key: int = 0
    text: str = ""


def run(mode, cipher_name: Optional[str], key: int, text: str) -> str:
    """
    Apply the named cipher to `text` in the requested direction.

    Raises UnknownAlgorithmError before UnknownModeError when both the
    algorithm and the mode are bad.
    """
    cipher = resolve(cipher_name)
    mode = Mode.parse(mode)
    log_info(f"Running {cipher.name} ({mode.name.lower()}) on {len(text)} character(s).")
    if mode is Mode.ENCRYPT:
        return cipher.encrypt(text, key)
    return cipher.decrypt(text, key)


def run_request(request: TransformRequest) -> str:
    return run(request.mode, request.cipher_name, request.key, request.text)

# ==========================================
#  CLI LOGIC
# ==========================================

KEY_MIN = -2 ** 31
KEY_MAX = 2 ** 31 - 1

def parse_key(value: str) -> int:
    """argparse type for -key: a 32-bit signed integer."""
    try:
        key = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer key: {value!r}")
    if not KEY_MIN <= key <= KEY_MAX:
        raise argparse.ArgumentTypeError(f"key out of 32-bit range: {value}")
    return key


def read_input(data: str, in_path: Optional[str]) -> str:
    """-data wins over -in; with neither the input is empty."""
    if data:
        if in_path:
            log_warn(f"Both -data and -in given. Ignoring '{in_path}'.")
        log_info("Reading input from -data.")
        return data
    if not in_path:
        return ""
    try:
        with open(in_path, "r", encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeError) as e:
        raise InputFileReadError(in_path, str(e)) from e
    log_info(f"Read {len(text)} character(s) from '{in_path}'.")
    return text


def write_output(result: str, out_path: Optional[str]):
    if out_path is None:
        print(result)
        return
    try:
        with open(out_path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(result)
    except (OSError, UnicodeError) as e:
        raise OutputFileWriteError(out_path, str(e)) from e
    log_info(f"Wrote {len(result)} character(s) to '{out_path}'.")


VALUE_FLAGS = ("-mode", "-alg", "-key", "-data", "-in", "-out")

def bind_values(argv: List[str]) -> List[str]:
    """
    Glue each value flag to the argument after it (`-data X` -> `-data=X`).

    argparse would otherwise read a value such as `-abc` as an option; the
    word following a value flag is always its value.
    """
    bound = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in VALUE_FLAGS and i + 1 < len(argv):
            bound.append(f"{arg}={argv[i + 1]}")
            i += 2
        else:
            bound.append(arg)
            i += 1
    return bound


def list_ciphers():
    """Print all available ciphers."""
    print("\nAvailable Ciphers:")
    print("=" * 60)
    for name, cipher in CIPHER_REGISTRY.items():
        print(f"  {name:<12} {cipher.description}")
    print("=" * 60)
    print(f"\nTotal: {len(CIPHER_REGISTRY)} cipher(s) registered.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shiftcrypt",
        description="Encrypt or decrypt text with a unicode or shift cipher.",
        formatter_class=argparse.RawTextHelpFormatter,
        allow_abbrev=False,
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    method_help = "\n".join(f"  {k:<12}: {v.description}" for k, v in CIPHER_REGISTRY.items())

    # No argparse choices: bad values must surface as exit status 1, not a usage error
    parser.add_argument("-mode", default=TransformRequest._field_defaults["mode"], metavar="{enc,dec}",
                        help="enc to encrypt (default), dec to decrypt")
    parser.add_argument("-alg", default=None, metavar="{" + ",".join(CIPHER_REGISTRY) + "}",
                        help=f"Cipher algorithm (required).\n{method_help}")
    parser.add_argument("-key", type=parse_key, default=TransformRequest._field_defaults["key"], metavar="N",
                        help="Integer key (default: 0)")

    parser.add_argument("-data", default=TransformRequest._field_defaults["text"], metavar="TEXT",
                        help="Input text (takes precedence over -in)")
    parser.add_argument("-in", dest="input", metavar="PATH",
                        help="Input file path, used when -data is empty")
    parser.add_argument("-out", dest="output", metavar="PATH",
                        help="Output file path (default: standard output)")

    parser.add_argument("--list", action="store_true", help="List all available ciphers and exit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable verbose output (info and warning messages)")
    return parser


def main(argv: Optional[List[str]] = None):
    global VERBOSE

    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(bind_values(argv))
    VERBOSE = args.verbose

    if args.list:
        list_ciphers()
        return

    try:
        # 1. READ INPUT
        text = read_input(args.data, args.input)

        # 2. TRANSFORM
        request = TransformRequest(mode=args.mode, cipher_name=args.alg, key=args.key, text=text)
        result = run_request(request)

        # 3. WRITE OUTPUT
        write_output(result, args.output)
    except ShiftCryptError as e:
        sys.exit(f"Error: {e}")

if __name__ == "__main__":
    main()
