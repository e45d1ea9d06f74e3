"""
Airflow Dataset Definitions

Central location for the dataset URIs that chain the medallion DAGs:
bronze ingestion -> silver load -> gold presentation.
"""
from airflow import Dataset

# Bronze layer (raw snapshots of the landed files)
BRONZE_TABLES = Dataset("warehouse://sqlserver/bronze")

# Silver layer (conformed tables)
SILVER_TABLES = Dataset("warehouse://sqlserver/silver")

# Gold layer (star schema views)
GOLD_STAR_SCHEMA = Dataset("warehouse://sqlserver/gold")
