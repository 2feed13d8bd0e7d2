"""Category module constants: tree shape and locking configuration."""

# Root nodes tagged with this kind do not count toward the root cap
ADDON_KIND = "addon"

# Depth of each lockable level; depth 0 (Sub-App) is never lockable
DEPTH_CATEGORY = 1
DEPTH_SUB_CATEGORY = 2
DEPTH_CHILD_CATEGORY = 3

LEVEL_NAMES = {
    0: "Sub App",
    DEPTH_CATEGORY: "Category",
    DEPTH_SUB_CATEGORY: "Sub Category",
    DEPTH_CHILD_CATEGORY: "Child Category",
}
