class MissingElementError(ValueError):
    """An id the map needs (province, center marker, layer, unit template) is not in the scene."""


class MalformedAssetError(RuntimeError):
    """An element exists but its path data or transform can't be parsed."""
