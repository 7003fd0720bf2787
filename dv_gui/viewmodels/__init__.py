"""ViewModels exposing Qt signals for views."""

from dv_gui.viewmodels.viewer_vm import ViewerViewModel

__all__ = ["ViewerViewModel"]
