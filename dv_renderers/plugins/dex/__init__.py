from dv_renderers.plugins.dex.renderer import DexRenderer

__all__ = ["DexRenderer"]
