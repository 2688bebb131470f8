from .hyprland import HyprlandIPC

__all__ = ['HyprlandIPC']
