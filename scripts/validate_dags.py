#!/usr/bin/env python3
"""
Validate the warehouse DAGs: every configured table has its bronze and silver
task, the silver chain follows ALL_TABLES order, and the bronze → silver → gold
dataset links are wired. DAG files are also checked for unused imports.
Usage: python scripts/validate_dags.py
"""
import ast
import sys
from pathlib import Path

from warehouse.datasets import BRONZE_TABLES, GOLD_STAR_SCHEMA, SILVER_TABLES
from warehouse.tables import ALL_TABLES

DAGS_PATH = Path(__file__).parent.parent / "airflow" / "dags"

BRONZE_DAG = "bronze_source_ingestion"
SILVER_DAG = "silver_load"
GOLD_DAG = "gold_presentation"


def unused_imports(file_path: Path) -> list[str]:
    """Names a DAG file imports but never references."""
    tree = ast.parse(file_path.read_text())

    imported = {}
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imported[alias.asname or alias.name.split(".")[0]] = node.lineno
        elif isinstance(node, ast.ImportFrom):
            for alias in node.names:
                imported[alias.asname or alias.name] = node.lineno

    used = {node.id for node in ast.walk(tree) if isinstance(node, ast.Name)}

    return [
        f"line {lineno}: '{name}' imported but unused"
        for name, lineno in sorted(imported.items(), key=lambda item: item[1])
        if name not in used
    ]


def outlet_uris(task) -> set:
    return {getattr(outlet, "uri", None) for outlet in task.outlets}


def trigger_uris(dag) -> set:
    triggers = dag.dataset_triggers
    # Airflow 2.9+ wraps a dataset list schedule in DatasetAll
    if hasattr(triggers, "iter_datasets"):
        return {uri for uri, _ in triggers.iter_datasets()}
    return {dataset.uri for dataset in triggers}


def _task_coverage(dag, prefix: str) -> list[str]:
    expected = {f"{prefix}{table.name}" for table in ALL_TABLES}
    actual = {task_id for task_id in dag.task_dict if task_id.startswith(prefix)}

    issues = [f"Missing task {task_id}" for task_id in sorted(expected - actual)]
    issues += [f"Task {task_id} has no configured table" for task_id in sorted(actual - expected)]
    return issues


def check_bronze(dag) -> list[str]:
    issues = _task_coverage(dag, "ingest_")

    publish = dag.task_dict.get("publish_bronze")
    if publish is None:
        return issues + ["Missing task publish_bronze"]

    if BRONZE_TABLES.uri not in outlet_uris(publish):
        issues.append(f"publish_bronze does not publish {BRONZE_TABLES.uri}")

    waits_for = {f"ingest_{table.name}" for table in ALL_TABLES}
    if not waits_for <= set(publish.upstream_task_ids):
        issues.append("publish_bronze does not wait for every ingest task")
    return issues


def check_silver(dag) -> list[str]:
    issues = _task_coverage(dag, "load_")

    if BRONZE_TABLES.uri not in trigger_uris(dag):
        issues.append(f"Not scheduled on {BRONZE_TABLES.uri}")

    task_ids = [f"load_{table.name}" for table in ALL_TABLES]
    for previous, current in zip(task_ids, task_ids[1:]):
        task = dag.task_dict.get(current)
        if task is not None and previous not in task.upstream_task_ids:
            issues.append(f"{current} does not run after {previous}")

    last = dag.task_dict.get(task_ids[-1])
    if last is not None and SILVER_TABLES.uri not in outlet_uris(last):
        issues.append(f"{task_ids[-1]} does not publish {SILVER_TABLES.uri}")
    return issues


def check_gold(dag) -> list[str]:
    issues = []

    if SILVER_TABLES.uri not in trigger_uris(dag):
        issues.append(f"Not scheduled on {SILVER_TABLES.uri}")

    views = dag.task_dict.get("create_gold_views")
    if views is None:
        issues.append("Missing task create_gold_views")
    elif GOLD_STAR_SCHEMA.uri not in outlet_uris(views):
        issues.append(f"create_gold_views does not publish {GOLD_STAR_SCHEMA.uri}")
    return issues


CHECKS = {
    BRONZE_DAG: check_bronze,
    SILVER_DAG: check_silver,
    GOLD_DAG: check_gold,
}


def validate_dags(dags: dict, import_errors: dict) -> list[tuple[str, str]]:
    """Run every DAG check. Returns (dag or file, message) pairs."""
    errors = [(path, message.strip()) for path, message in import_errors.items()]

    for dag_id, check in CHECKS.items():
        dag = dags.get(dag_id)
        if dag is None:
            errors.append((dag_id, "DAG not found"))
            continue
        errors.extend((dag_id, issue) for issue in check(dag))
    return errors


def load_dag_bag(dags_path: Path = DAGS_PATH):
    from airflow.models import DagBag

    return DagBag(dag_folder=str(dags_path), include_examples=False)


def main():
    if not DAGS_PATH.exists():
        print(f"DAGs directory not found: {DAGS_PATH}")
        sys.exit(1)

    # DAGs are grouped by layer: bronze/, silver/, gold/
    dag_files = sorted(DAGS_PATH.rglob("*.py"))
    print(f"Validating {len(dag_files)} DAG file(s)...\n")

    errors = []
    for dag_file in dag_files:
        name = str(dag_file.relative_to(DAGS_PATH))
        errors.extend((name, issue) for issue in unused_imports(dag_file))

    dag_bag = load_dag_bag()
    errors.extend(validate_dags(dag_bag.dags, dag_bag.import_errors))

    for dag_id in CHECKS:
        print(f"  {dag_id}: {'found' if dag_id in dag_bag.dags else 'missing'}")
    print()

    if errors:
        print(f"❌ {len(errors)} error(s) found:")
        for name, msg in errors:
            print(f"   - {name}: {msg}")
        sys.exit(1)
    else:
        print(f"✅ All {len(CHECKS)} DAG(s) validated against {len(ALL_TABLES)} tables!")
        sys.exit(0)


if __name__ == "__main__":
    main()
