"""
Import-boundary enforcement for the invoice kernel.

1. Config direction  -- invoice_kernel/** may not import invoice_config.
2. Domain purity     -- invoice_kernel/domain/** may not import the ORM,
                        db/, models/, services/ or selectors/.
3. Selector reads    -- invoice_kernel/selectors/** may not import services/.

All scanning is done via AST -- these tests are read-only.
"""

import ast
import glob
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parents[2]


def _python_files(root: str) -> list[str]:
    """Return all .py files under *root*, sorted for deterministic order."""
    return sorted(glob.glob(f"{PACKAGE_ROOT / root}/**/*.py", recursive=True))


def _extract_imports(filepath: str) -> list[tuple[int, str]]:
    """Return (line_number, module_string) for every import in *filepath*."""
    tree = ast.parse(Path(filepath).read_text(), filename=filepath)

    results: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                results.append((node.lineno, alias.name))
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                results.append((node.lineno, node.module))
    return results


def _matches_any(module: str, prefixes: tuple[str, ...]) -> bool:
    """True if *module* equals or is a child of any prefix."""
    return any(module == p or module.startswith(f"{p}.") for p in prefixes)


def _violations(root: str, forbidden: tuple[str, ...]) -> list[str]:
    found: list[str] = []
    for filepath in _python_files(root):
        for lineno, module in _extract_imports(filepath):
            if _matches_any(module, forbidden):
                found.append(f"  {filepath}:{lineno} imports '{module}'")
    return found


class TestConfigDirection:

    def test_kernel_never_imports_config(self):
        violations = _violations("invoice_kernel", ("invoice_config",))
        assert not violations, (
            "invoice_kernel/** must not import invoice_config; build kernel "
            "inputs in invoice_config.bridges instead:\n" + "\n".join(violations)
        )


class TestDomainPurity:

    FORBIDDEN_PREFIXES = (
        "sqlalchemy",
        "invoice_kernel.db",
        "invoice_kernel.models",
        "invoice_kernel.services",
        "invoice_kernel.selectors",
        "invoice_config",
    )

    def test_domain_files_have_no_forbidden_imports(self):
        violations = _violations("invoice_kernel/domain", self.FORBIDDEN_PREFIXES)
        assert not violations, (
            "Domain purity violation:\n" + "\n".join(violations)
        )

    def test_domain_files_scanned(self):
        assert len(_python_files("invoice_kernel/domain")) >= 6


class TestSelectorBoundary:

    def test_selectors_do_not_import_services(self):
        violations = _violations("invoice_kernel/selectors", ("invoice_kernel.services",))
        assert not violations, (
            "Selectors are read-only and must not import services:\n"
            + "\n".join(violations)
        )
