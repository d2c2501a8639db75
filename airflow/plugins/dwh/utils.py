"""
Utility Functions

Common helpers for DAGs.
"""
from datetime import datetime, timezone


def get_run_timestamp(context) -> datetime:
    """
    Get the run timestamp from Airflow context.

    Every task of a DAG run stamps the same conformed_at, so the DAG run's
    start is used rather than the task's own clock.

    Args:
        context: Airflow task context

    Returns:
        Naive UTC datetime (SQL Server DATETIME2 has no offset)
    """
    dag_run = context.get('dag_run')
    dt = getattr(dag_run, 'start_date', None) or context.get('logical_date')
    if dt is None:
        return datetime.utcnow()
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt
