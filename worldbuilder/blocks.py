"""Block kinds placed into the world."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Block:
    name: str
    namespace: str = "minecraft"

    @property
    def id(self) -> str:
        return f"{self.namespace}:{self.name}"

    def __str__(self):
        return self.id


AIR = Block("air")
BEDROCK = Block("bedrock")
BLACK_CONCRETE = Block("black_concrete")
BRICK = Block("bricks")
COBBLESTONE = Block("cobblestone")
COBBLESTONE_WALL = Block("cobblestone_wall")
DARK_OAK_DOOR = Block("dark_oak_door")
DIRT = Block("dirt")
DIRT_PATH = Block("dirt_path")
FARMLAND = Block("farmland")
GLASS = Block("glass")
GLOWSTONE = Block("glowstone")
GRASS_BLOCK = Block("grass_block")
GRAVEL = Block("gravel")
GRAY_CONCRETE = Block("gray_concrete")
GREEN_TERRACOTTA = Block("green_terracotta")
HAY_BLOCK = Block("hay_block")
LIGHT_GRAY_CONCRETE = Block("light_gray_concrete")
LIME_CONCRETE = Block("lime_concrete")
OAK_FENCE = Block("oak_fence")
OAK_LEAVES = Block("oak_leaves")
OAK_LOG = Block("oak_log")
OAK_PLANKS = Block("oak_planks")
OAK_SLAB = Block("oak_slab")
PODZOL = Block("podzol")
RAIL = Block("rail")
SAND = Block("sand")
SANDSTONE = Block("sandstone")
SMOOTH_STONE = Block("smooth_stone")
SNOW_BLOCK = Block("snow_block")
SPRUCE_LOG = Block("spruce_log")
SPRUCE_LEAVES = Block("spruce_leaves")
STONE = Block("stone")
STONE_BRICKS = Block("stone_bricks")
STONE_BRICK_WALL = Block("stone_brick_wall")
WATER = Block("water")
WHITE_CONCRETE = Block("white_concrete")
WHITE_TERRACOTTA = Block("white_terracotta")
YELLOW_CONCRETE = Block("yellow_concrete")
