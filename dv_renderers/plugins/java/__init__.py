from dv_renderers.plugins.java.renderer import JavaRenderer

__all__ = ["JavaRenderer"]
