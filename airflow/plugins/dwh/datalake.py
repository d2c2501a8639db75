"""
Azure Data Lake Storage Operations

The CRM and ERP extracts are dropped as CSV files into the landing container
of the Data Lake; bronze ingestion reads them from there.
"""
import os
import time

from azure.storage.filedatalake import DataLakeServiceClient


# Configuration from environment
STORAGE_ACCOUNT_NAME = os.environ.get('AZURE_STORAGE_ACCOUNT_NAME', '')
STORAGE_ACCOUNT_KEY = os.environ.get('AZURE_STORAGE_ACCOUNT_KEY', '')
LANDING_CONTAINER = os.environ.get('LANDING_CONTAINER', 'landing')


def get_datalake_client() -> DataLakeServiceClient:
    """Create Data Lake service client."""
    if not STORAGE_ACCOUNT_NAME or not STORAGE_ACCOUNT_KEY:
        raise ValueError(
            "Missing AZURE_STORAGE_ACCOUNT_NAME or AZURE_STORAGE_ACCOUNT_KEY. "
            "Set these in /opt/airflow/.env"
        )
    account_url = f"https://{STORAGE_ACCOUNT_NAME}.dfs.core.windows.net"
    return DataLakeServiceClient(account_url=account_url, credential=STORAGE_ACCOUNT_KEY)


def read_from_datalake(container: str, path: str, encoding: str = 'utf-8-sig') -> str:
    """
    Read a text file from Data Lake.

    Args:
        container: Container name (e.g. landing)
        path: File path within container
        encoding: Text encoding; the default strips the BOM Excel exports add

    Returns:
        File contents as string
    """
    service_client = get_datalake_client()
    file_system_client = service_client.get_file_system_client(container)
    file_client = file_system_client.get_file_client(path)
    download = file_client.download_file()
    return download.readall().decode(encoding)


def file_exists(container: str, path: str) -> bool:
    """
    Check if file exists in Data Lake.

    Args:
        container: Container name
        path: File path within container

    Returns:
        True if file exists, False otherwise
    """
    service_client = get_datalake_client()
    file_system_client = service_client.get_file_system_client(container)
    file_client = file_system_client.get_file_client(path)
    return file_client.exists()


def wait_for_file(
    container: str,
    path: str,
    timeout_seconds: int = 300,
    poll_interval: int = 10,
) -> None:
    """
    Wait for a source file to land before ingesting it.

    Args:
        container: Container name
        path: File path within container
        timeout_seconds: Maximum time to wait (default: 5 minutes)
        poll_interval: Seconds between checks (default: 10)

    Raises:
        TimeoutError: If the file is not found within timeout
    """
    full_path = f"{container}/{path}"
    start_time = time.time()
    attempts = 0

    while time.time() - start_time < timeout_seconds:
        attempts += 1
        if file_exists(container, path):
            if attempts > 1:
                print(f"Found {full_path} after {time.time() - start_time:.1f}s ({attempts} attempts)")
            return

        print(f"  Attempt {attempts}: {full_path} not found, retrying in {poll_interval}s...")
        time.sleep(poll_interval)

    elapsed = time.time() - start_time
    raise TimeoutError(f"Timeout waiting for {full_path} after {elapsed:.1f}s ({attempts} attempts)")
