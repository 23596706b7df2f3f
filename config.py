# config.py
"""
Configuration settings for the floating-caption player.
"""
FPS   = 30

# ── Basic Application Settings ──────────────────────────────────────────────

# Captions start visible; "toggle" flips them at runtime
SHOW_CAPTIONS = True

# Display settings
FULLSCREEN = False
WINDOWED_SIZE = (1280, 720)

# Stage colour where the media engine's frames would be presented
BACKGROUND = (0, 0, 0)

# ── Lane scheduler ──────────────────────────────────────────────────────────

LANE_COUNT          = 24    # vertical slots across the video height
NORMAL_LANES        = 12    # lanes used while load is low
HIGH_FREQ_THRESHOLD = 4     # rolling average (captions / window) that opens all lanes

# Length of one frequency window, in seconds
CAPTION_TICK_SEC = 1.0

# ── Caption look & motion ──────────────────────────────────────────────────

CAPTION_MS_PER_PIXEL  = 10          # scroll duration = surface width × this (ms)
CAPTION_EXIT_X        = -500        # x where the scroll animation ends
CAPTION_FONT_PX       = 18
CAPTION_COLOR         = (255, 255, 255)
CAPTION_SHADOW        = (0, 0, 0)
CAPTION_SHADOW_OFFSET = (1, 1)
CAPTION_MAX_CHARS     = 120         # longer submissions are rejected by the remote

# ── Web remote ──────────────────────────────────────────────────────────────

WEB_PORT              = 8080
DIAG_REFRESH_INTERVAL = 1.0
