"""Drawing tool registry.

Tools are looked up by the name used in the toolbar and in operation records.
The bezier path tool is registered under 'bezier' to match its operation tag.
"""

from .base_tool import BaseTool
from .circle_tool import CircleTool
from .grid_tool import GridTool
from .line_tool import LineTool
from .path_tool import PathTool
from .pencil_tool import PencilTool
from .poly_tool import PolyTool

AVAILABLE_TOOLS = {
    'pencil': PencilTool,
    'line': LineTool,
    'circle': CircleTool,
    'poly': PolyTool,
    'bezier': PathTool,
    'grid': GridTool,
}


def create_tool(name, controller):
    """Create a tool instance by name.

    Raises:
        KeyError: unknown tool name
    """
    try:
        tool_class = AVAILABLE_TOOLS[name]
    except KeyError:
        raise KeyError(f"Unknown tool '{name}'") from None
    return tool_class(controller)


def get_available_tools():
    return list(AVAILABLE_TOOLS.keys())


__all__ = [
    'BaseTool', 'PencilTool', 'LineTool', 'CircleTool', 'PolyTool', 'PathTool',
    'GridTool', 'AVAILABLE_TOOLS', 'create_tool', 'get_available_tools',
]
