"""
Bronze Layer: Source File Ingestion

Loads the CRM and ERP CSV exports from the Data Lake landing container into
the bronze schema. Each file gets its own task; every run truncates and
reloads the bronze table, so reruns are safe.
Publishes to BRONZE_TABLES dataset to trigger the silver load.

Schedule: Daily
Source: landing/source_crm/*.csv, landing/source_erp/*.csv
Target: bronze.<table>
"""
from datetime import datetime, timedelta

from airflow import DAG
from airflow.operators.python import PythonOperator

from warehouse.datalake import LANDING_CONTAINER, wait_for_file
from warehouse.datasets import BRONZE_TABLES
from warehouse.ingestion import ingest_table
from warehouse.tables import ALL_TABLES, get_table

# Configuration
WAIT_TIMEOUT_SECONDS = 600  # 10 minutes
WAIT_POLL_INTERVAL = 30     # Check every 30 seconds


def summarize_ingestion(**context):
    """Report the loaded tables; emits the bronze dataset event."""
    print(f"All {len(ALL_TABLES)} bronze tables loaded")


def ingest_source_file(table_name: str, **context):
    """Wait for the landed file, then full-replace its bronze table."""
    table_config = get_table(table_name)

    wait_for_file(
        LANDING_CONTAINER, table_config.landing_path,
        timeout_seconds=WAIT_TIMEOUT_SECONDS,
        poll_interval=WAIT_POLL_INTERVAL,
    )

    result = ingest_table(table_config)
    print(f"Bronze load complete: {result['rows_written']} rows {result['source']} → {table_config.bronze_table}")
    return result


default_args = {
    'owner': 'data-engineering',
    'depends_on_past': False,
    'email_on_failure': False,
    'retries': 2,
    'retry_delay': timedelta(minutes=5),
}

with DAG(
    'bronze_source_ingestion',
    default_args=default_args,
    description='Bronze: Load CRM and ERP source files',
    schedule='@daily',
    start_date=datetime(2024, 1, 1),
    catchup=False,
    max_active_runs=1,
    tags=['bronze', 'crm', 'erp', 'medallion'],
    doc_md=__doc__,
) as dag:

    ingest_tasks = [
        PythonOperator(
            task_id=f'ingest_{table.name}',
            python_callable=ingest_source_file,
            op_kwargs={'table_name': table.name},
        )
        for table in ALL_TABLES
    ]

    publish = PythonOperator(
        task_id='publish_bronze',
        python_callable=summarize_ingestion,
        outlets=[BRONZE_TABLES],
    )

    ingest_tasks >> publish
