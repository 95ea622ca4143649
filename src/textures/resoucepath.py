ASSETS_PATH: str = "./assets/"
TEXTURES_PATH: str = ASSETS_PATH + "textures/"

# Watercolor paper grain (optional; the scene renders plain without it)
PAPER_TEXTURE_PATH: str = TEXTURES_PATH + "paper.jpg"
