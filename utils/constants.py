"""BlurHash format constants."""

BASE83_ALPHABET = (
    "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz#$%*+,-.:;=?@[]^_{|}~"
)
BASE83_VALUES = {char: value for value, char in enumerate(BASE83_ALPHABET)}
BASE83_RADIX = len(BASE83_ALPHABET)

# Component counts per axis
MIN_COMPONENTS = 1
MAX_COMPONENTS = 9

# Field widths in base83 digits
SIZE_FLAG_DIGITS = 1
MAX_AC_DIGITS = 1
DC_DIGITS = 4
AC_DIGITS = 2
HEADER_LENGTH = SIZE_FLAG_DIGITS + MAX_AC_DIGITS + DC_DIGITS

# AC quantization
AC_SCALE = 166.0
AC_MAX_QUANT = 82
AC_LEVELS = 19
AC_HALF_LEVEL = 9

# sRGB transfer curve
SRGB_DECODE_THRESHOLD = 0.04045
SRGB_ENCODE_THRESHOLD = 0.0031308
SRGB_GAMMA = 2.4

ALPHA_OPAQUE = 255
