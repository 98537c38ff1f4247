"""Diagnostic tool for verifying mdbridge installation and dependencies."""

import sys
from importlib import import_module
from typing import Optional

from rich.console import Console
from rich.table import Table

CORE_DEPENDENCIES = [
    ("bs4", "beautifulsoup4"),
    ("html2text", "html2text"),
    ("readability", "readability-lxml"),
    ("lxml", "lxml"),
    ("mistune", "mistune"),
    ("pydantic", "pydantic"),
    ("rich", "rich"),
]

OPTIONAL_DEPENDENCIES = [
    ("yaml", "pyyaml"),
]


def check_dependency(
    module_name: str, package_name: Optional[str] = None, optional: bool = False
) -> tuple[bool, str]:
    """
    Check if a Python module is importable.

    Args:
        module_name: Name of the module to import
        package_name: Display name of the package (defaults to module_name)
        optional: Whether this is an optional dependency

    Returns:
        Tuple of (success: bool, message: str)
    """
    display_name = package_name or module_name

    try:
        import_module(module_name)
        return True, f"[OK] {display_name}"
    except ImportError:
        if optional:
            return False, f"[WARN] {display_name} (optional - not installed)"
        return False, f"[MISSING] {display_name}"


def run_doctor(console: Optional[Console] = None) -> int:
    """
    Run diagnostic checks and display results.

    Returns:
        Exit code (0 if all core dependencies OK, 1 if any core dependency missing)
    """
    console = console or Console()
    console.print("Running mdbridge diagnostics...\n")

    core_results = [check_dependency(mod, pkg) for mod, pkg in CORE_DEPENDENCIES]
    optional_results = [check_dependency(mod, pkg, optional=True) for mod, pkg in OPTIONAL_DEPENDENCIES]

    all_checks = {
        "Core Dependencies": core_results,
        "Optional Dependencies": optional_results,
    }

    for category, results in all_checks.items():
        table = Table(title=category, show_header=False, box=None)
        table.add_column("Status", style="bold")

        for success, message in results:
            style = "green" if success else ("yellow" if "optional" in message else "red")
            # Messages contain [OK]-style tags that rich would treat as markup
            table.add_row(message.replace("[", "\\["), style=style)

        console.print(table)
        console.print()

    if any(not success for success, _ in core_results):
        console.print("\nWARNING: Some core dependencies are missing!")
        console.print("\nRecommended fix: pip install --upgrade --force-reinstall mdbridge")
        return 1

    console.print("\nAll core dependencies installed correctly!")
    if any(not success for success, _ in optional_results):
        console.print("\nOptional features available:")
        console.print("  - YAML config support: pip install mdbridge\\[yaml]")
    return 0


if __name__ == "__main__":
    sys.exit(run_doctor())
