from inksheet import __version__

APP_VERSION = __version__

NATIVE_FILE_EXTENSION = ".inksheet"

DEFAULT_DPI = 96.0

DEFAULT_BACKGROUND_COLOR = "#ffffff"
DEFAULT_PATTERN_COLOR = "#bdd3e8"
DEFAULT_PATTERN_SIZE = 32.0

# SVG 좌표 소수점 자릿수
SVG_FLOAT_DECIMALS = 3

# 픽셀 크기 상한 (i32)
MAX_DIMENSION = 2**31 - 1

# 이보다 촘촘한 배경 패턴은 그리지 않음
MIN_PATTERN_SIZE = 2.0
