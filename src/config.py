WIDTH = 1600
HEIGHT = 900
FULLSCREEN = False
FPS = 60
VSYNC = True
CAPTION = "Watercolor Fantasy Nature"
SEED = None  # None -> different scene every run

# Camera
FOV = 60
NEAR = 0.1
FAR = 1000.0
STARTING_POS = (30.0, 25.0, 30.0)
LOOK_AT = (0.0, 0.0, 0.0)
# Orbit controls
ORBIT_DAMPING = 0.05
ORBIT_MIN_DISTANCE = 15.0
ORBIT_MAX_DISTANCE = 100.0
ORBIT_MAX_POLAR = 3.141592653589793 / 2.1
ORBIT_ROTATE_SPEED = 1.0
ORBIT_ZOOM_STEP = 0.95  # distance multiplier per wheel notch

# Atmosphere
SKY_BLUE = 0x87CEEB
FOG_NEAR = 50.0
FOG_FAR = 200.0
SKY_RADIUS = 500.0
SKY_HORIZON = 0xB0D4F1
SKY_ZENITH = 0x4A90D9

# Lighting
AMBIENT_COLOR = 0xFFFFFF
AMBIENT_INTENSITY = 0.6
SUN_COLOR = 0xFFF8DC
SUN_INTENSITY = 0.8
SUN_POSITION = (50.0, 80.0, 30.0)
HEMI_SKY_COLOR = 0x87CEEB
HEMI_GROUND_COLOR = 0x6B8E23
HEMI_INTENSITY = 0.4

# Ground
GROUND_RADIUS = 40.0
GROUND_SEGMENTS = 64
GROUND_RINGS = 24
GROUND_HEIGHT_SCALE = 0.8
GRASS_COLOR = 0x5D8A3A
DIRT_COLOR = 0x8B7355
DARK_GRASS_COLOR = 0x4A6B2F

# Scatter counts and ranges (min, max)
CLOUD_COUNT = 15
CLOUD_DISTANCE = (30.0, 70.0)
CLOUD_ELEVATION = (15.0, 30.0)
CLOUD_SCALE = (0.8, 1.4)
CLOUD_PUFFS = 5

DECIDUOUS_COUNT = 8
DECIDUOUS_DISTANCE = (15.0, 30.0)
DECIDUOUS_SCALE = (0.8, 1.3)
PINE_COUNT = 6
PINE_DISTANCE = (18.0, 30.0)
PINE_SCALE = (0.7, 1.3)

MUSHROOM_COUNT = 20
MUSHROOM_DISTANCE = (8.0, 33.0)
MUSHROOM_SCALE = (0.3, 0.7)
MUSHROOM_SPOTS = 5

# (angle, distance) of each altar
ALTAR_POSITIONS = (
    (0.0, 25.0),
    (3.141592653589793 * 2 / 3, 25.0),
    (3.141592653589793 * 4 / 3, 25.0),
    (3.141592653589793 / 3, 28.0),
    (3.141592653589793, 28.0),
)
CRYSTAL_PALETTE = (0x9B59B6, 0x3498DB, 0x1ABC9C, 0xE74C3C, 0xF39C12, 0x00FFFF)
CRYSTAL_HOVER = 1.5  # above the altar top
CRYSTAL_LIGHT_INTENSITY = 1.5
CRYSTAL_LIGHT_DISTANCE = 5.0

# Animation (per displayed frame)
CRYSTAL_FLOAT_AMPLITUDE = 0.3
CRYSTAL_FLOAT_FREQUENCY = 1.0
CRYSTAL_SPIN = 0.01
CLOUD_SPIN = 0.0002

# Watercolor post-processing
POSTPROCESS_ENABLED = True
WATERCOLOR_SCALE = 0.025
WATERCOLOR_THRESHOLD = 0.6
WATERCOLOR_DARKENING = 2.0
WATERCOLOR_PIGMENT = 1.3
