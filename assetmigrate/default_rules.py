# Simple, opinionated defaults.
DEFAULT_IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".svg"}
DEFAULT_AUDIO_EXTENSIONS = {".mp3", ".wav", ".ogg"}

# Checked in this order: singular first, then plural.
DEFAULT_IMAGE_DIRS = ("image", "images")

# Basename fragments that mark the preferred audio clip (matched lower-case).
DEFAULT_AUDIO_HINTS = ("dispar", "sonido", "shot", "fire")
DEFAULT_AUDIO_NAME = "shot"

# Never scanned nor copied.
IGNORED_NAMES = {".git"}

DEFAULT_SOURCE_REPO = "https://github.com/patxipb/figuras.git"
DEFAULT_DESTINATION = "./simulador"

ASSETS_DIR = "assets"
IMAGES_DIR = "images"
AUDIO_DIR = "audio"
