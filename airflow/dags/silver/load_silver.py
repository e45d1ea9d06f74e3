"""
Silver Layer: Conformed Table Load

Rebuilds each silver table from its bronze snapshot (cleansing, dedup,
date repair and sales reconciliation). Tables load one after another in
ALL_TABLES order; a failing table rolls back its own replace and stops the
chain, so later tables keep their last-good snapshot.
Triggered by BRONZE_TABLES dataset. Publishes SILVER_TABLES.

Schedule: On Bronze dataset update
Target: silver.<table> (+ dwh_create_date)
"""
from datetime import datetime

from airflow import DAG
from airflow.models.baseoperator import chain
from airflow.operators.python import PythonOperator

from warehouse.datasets import BRONZE_TABLES, SILVER_TABLES
from warehouse.silver import load_silver
from warehouse.tables import ALL_TABLES, get_table


def load_silver_table(table_name: str, **context):
    """Load one silver table, stamped with the DAG run start time."""
    load_timestamp = context['dag_run'].start_date.replace(tzinfo=None)
    results = load_silver([get_table(table_name)], load_timestamp=load_timestamp)
    result = results[0]
    print(
        f"Silver load complete: {result['rows_read']} raw → {result['rows_written']} rows "
        f"in {result['duration_seconds']}s ({table_name})"
    )
    return result


default_args = {
    'owner': 'data-engineering',
    'depends_on_past': False,
    'email_on_failure': False,
    'retries': 0,  # fail fast, later tables must not run
}

with DAG(
    'silver_load',
    default_args=default_args,
    description='Silver: Cleanse and conform bronze tables',
    schedule=[BRONZE_TABLES],  # Triggered by Bronze
    start_date=datetime(2024, 1, 1),
    catchup=False,
    max_active_runs=1,
    tags=['silver', 'crm', 'erp', 'medallion'],
    doc_md=__doc__,
) as dag:

    load_tasks = [
        PythonOperator(
            task_id=f'load_{table.name}',
            python_callable=load_silver_table,
            op_kwargs={'table_name': table.name},
            outlets=[SILVER_TABLES] if table is ALL_TABLES[-1] else [],
        )
        for table in ALL_TABLES
    ]

    chain(*load_tasks)
