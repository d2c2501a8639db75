#!/usr/bin/env python3
"""
Check the medallion DAG files without importing Airflow.

Each file under airflow/dags/<layer>/ is parsed and its DAG(...) call is
checked against the rules every pipeline here follows:

- dag_id starts with the layer folder name (bronze_, silver_, gold_)
- full refresh runs never overlap: max_active_runs=1, catchup=False
- no automatic retries: default_args sets 'retries': 0
- bronze runs on a cron schedule; silver and gold on upstream Datasets
- at least one task publishes a Dataset through outlets=
- the module docstring is shown in the UI via doc_md=__doc__

Usage: python scripts/validate_dags.py
"""
import ast
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

DAGS_PATH = Path(__file__).parent.parent / "airflow" / "dags"
DATASET_LAYERS = ('silver', 'gold')


def _literal(node: Optional[ast.AST]) -> Any:
    if node is None:
        return None
    try:
        return ast.literal_eval(node)
    except ValueError:
        return None


def _find_dag_call(tree: ast.Module) -> Optional[ast.Call]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Call) and isinstance(node.func, ast.Name) and node.func.id == 'DAG':
            return node
    return None


def _module_dict(tree: ast.Module, name: str) -> Dict[str, Any]:
    """Literal dict assigned to a module-level name, e.g. default_args."""
    for node in tree.body:
        if isinstance(node, ast.Assign) and any(
            isinstance(t, ast.Name) and t.id == name for t in node.targets
        ):
            value = _literal(node.value)
            return value if isinstance(value, dict) else {}
    return {}


def _has_outlets(tree: ast.Module) -> bool:
    return any(
        isinstance(node, ast.keyword) and node.arg == 'outlets'
        for node in ast.walk(tree)
    )


def check_dag_file(file_path: Path, layer: str) -> List[str]:
    """
    Return the rule violations of one DAG file (empty when it is valid).

    Args:
        file_path: DAG module to parse
        layer: Folder the file lives in (bronze, silver or gold)
    """
    try:
        tree = ast.parse(file_path.read_text(), filename=str(file_path))
    except SyntaxError as e:
        return [f"Syntax error at line {e.lineno}: {e.msg}"]

    dag_call = _find_dag_call(tree)
    if dag_call is None:
        return ["No DAG(...) definition found"]

    kwargs = {kw.arg: kw.value for kw in dag_call.keywords if kw.arg}
    issues = []

    dag_id = _literal(kwargs.get('dag_id'))
    if not isinstance(dag_id, str) or not dag_id.startswith(f"{layer}_"):
        issues.append(f"dag_id {dag_id!r} must start with '{layer}_'")

    if _literal(kwargs.get('max_active_runs')) != 1:
        issues.append("max_active_runs must be 1")
    if _literal(kwargs.get('catchup')) is not False:
        issues.append("catchup must be False")

    if _module_dict(tree, 'default_args').get('retries') != 0:
        issues.append("default_args must set 'retries': 0")

    schedule = kwargs.get('schedule')
    if schedule is None:
        issues.append("Missing schedule")
    elif layer in DATASET_LAYERS and not isinstance(schedule, ast.List):
        issues.append("schedule must be a list of upstream Datasets")
    elif layer not in DATASET_LAYERS and isinstance(schedule, ast.List):
        issues.append("first layer must run on a time schedule")

    if not _has_outlets(tree):
        issues.append("No task publishes a Dataset (outlets=)")

    doc_md = kwargs.get('doc_md')
    if not (isinstance(doc_md, ast.Name) and doc_md.id == '__doc__') or not ast.get_docstring(tree):
        issues.append("doc_md must be the module docstring")

    return issues


def main(dags_path: Path = DAGS_PATH) -> int:
    if not dags_path.exists():
        print(f"DAGs directory not found: {dags_path}")
        return 1

    dag_files = sorted(p for p in dags_path.glob("*/*.py") if p.name != "__init__.py")
    if not dag_files:
        print("No DAG files found")
        return 1

    print(f"Validating {len(dag_files)} DAG file(s)...\n")

    errors = []
    for dag_file in dag_files:
        name = dag_file.relative_to(dags_path)
        issues = check_dag_file(dag_file, layer=dag_file.parent.name)
        print(f"  {name}: {'OK' if not issues else ', '.join(issues)}")
        errors.extend((name, issue) for issue in issues)

    print()

    if errors:
        print(f"❌ {len(errors)} error(s) found:")
        for name, msg in errors:
            print(f"   - {name}: {msg}")
        return 1

    print(f"✅ All {len(dag_files)} DAG(s) validated successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
