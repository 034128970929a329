"""
Resistor Decoder - App Configuration
"""

# Touchscreen display
SCREEN_W   = 480
SCREEN_H   = 320
FULLSCREEN = True
FPS        = 30

# Web form
WEB_HOST = "127.0.0.1"
WEB_PORT = 8000

# Logging
LOG_LEVEL = "INFO"

# Bands shown when a form or the decoder screen first opens (A, B, C, D)
DEFAULT_BANDS = ("yellow", "violet", "red", "gold")
