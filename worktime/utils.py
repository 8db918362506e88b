from pathlib import Path


def get_resource_path(relative_path: str) -> Path:
    """
    Get absolute path to a packaged resource.

    Args:
        relative_path: Relative path from the package root (e.g., "resources/templates")

    Returns:
        Absolute Path object
    """
    # This file is in worktime/utils.py, so the package root is its parent
    base_path = Path(__file__).parent.absolute()
    return base_path / relative_path
