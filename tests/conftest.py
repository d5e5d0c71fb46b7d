import pytest

from macroeval.evaluation.baseline import never_confident
from macroeval.evaluation.evaluator import Evaluator
from macroeval.types.result import UNKNOWN
from macroeval.types.state import MacroOptions, MacroState, PackageInfo

MACROS = "@embroider/macros"

MACRO_IMPORTS = (
    "import { getConfig, getOwnConfig, getGlobalConfig, isTesting, isDevelopingApp, "
    "isDevelopingThisPackage, dependencySatisfies, moduleExists } from '@embroider/macros';"
)


class CountingBaseline:
    """Baseline stub that knows nothing and records the text of every node it is asked about."""

    def __init__(self):
        self.visits: list[str] = []

    def __call__(self, path):
        self.visits.append(path.text)
        return UNKNOWN


@pytest.fixture
def evaluator():
    return Evaluator()


@pytest.fixture
def bare_evaluator():
    # No host knowledge at all: only the evaluator's own rules.
    return Evaluator(baseline=never_confident)


@pytest.fixture
def counting_baseline():
    return CountingBaseline()


@pytest.fixture
def find():
    def _find(root, node_type, text=None):
        for path in root.walk():
            if path.type == node_type and (text is None or path.text == text):
                return path
        raise LookupError(f"no {node_type} node {text!r}")
    return _find


@pytest.fixture
def project(tmp_path):
    """An app with one addon installed under node_modules."""
    app_root = tmp_path / "app"
    addon_root = app_root / "node_modules" / "my-addon"
    (app_root / "src").mkdir(parents=True)
    (addon_root / "utils").mkdir(parents=True)
    (app_root / "src" / "index.js").write_text("", encoding="utf-8")
    (app_root / "src" / "helper.js").write_text("export default 1;\n", encoding="utf-8")
    (addon_root / "index.js").write_text("", encoding="utf-8")
    (addon_root / "utils" / "index.js").write_text("", encoding="utf-8")
    return app_root, addon_root


@pytest.fixture
def state(project):
    app_root, addon_root = project
    options = MacroOptions(
        app_package_root=str(app_root),
        is_developing_package_roots=[str(app_root)],
        user_configs={
            str(app_root): {"mode": "dev", "flags": [1, 2]},
            str(addon_root): {"color": "red"},
        },
        global_config={MACROS: {"isTesting": True}, "other": 1},
        packages=[
            PackageInfo("app", str(app_root), "1.0.0"),
            PackageInfo("my-addon", str(addon_root), "2.3.4"),
        ],
    )
    return MacroState(filename=str(app_root / "src" / "index.js"), options=options)
