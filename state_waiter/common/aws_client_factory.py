"""
AWS Client Factory Module
Provides boto3 client creation with credentials loaded from a .env file.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import boto3
from dotenv import load_dotenv


def resolve_env_path(env_path: Optional[str] = None) -> str:
    """
    Determine which .env file should be used.

    Priority order:
      1. Explicit parameter
      2. AWS_ENV_FILE environment variable
      3. ~/.env
    """
    if env_path:
        return env_path
    aws_env_file = os.environ.get("AWS_ENV_FILE")
    if aws_env_file:
        return aws_env_file
    return str(Path.home() / ".env")


def load_credentials_from_env(env_path: Optional[str] = None) -> tuple[str, str]:
    """
    Load AWS credentials from .env file and return them as a tuple.

    Args:
        env_path: Optional override path (defaults to ~/.env)

    Returns:
        tuple: (aws_access_key_id, aws_secret_access_key)

    Raises:
        ValueError: If credentials are not found in .env file
    """
    resolved_path = resolve_env_path(env_path)
    load_dotenv(resolved_path)

    aws_access_key_id = os.getenv("AWS_ACCESS_KEY_ID")
    aws_secret_access_key = os.getenv("AWS_SECRET_ACCESS_KEY")
    if aws_access_key_id and aws_secret_access_key:
        logging.info("✅ AWS credentials loaded from %s", resolved_path)
        return aws_access_key_id, aws_secret_access_key

    raise ValueError(f"AWS credentials not found in {resolved_path}")


def create_client(
    service_name: str,
    region: Optional[str] = None,
    aws_access_key_id: Optional[str] = None,
    aws_secret_access_key: Optional[str] = None,
    aws_session_token: Optional[str] = None,
    env_path: Optional[str] = None,
):
    """
    Create a boto3 client for an AWS service.

    Args:
        service_name: AWS service name (e.g., 'ec2')
        region: AWS region name (optional)
        aws_access_key_id: Optional AWS access key (loads from env if not provided)
        aws_secret_access_key: Optional AWS secret key (loads from env if not provided)
        aws_session_token: Optional session token (falls back to AWS_SESSION_TOKEN)
        env_path: .env file holding the credentials (see resolve_env_path)

    Returns:
        boto3.client: Configured AWS service client
    """
    if aws_access_key_id is None or aws_secret_access_key is None:
        aws_access_key_id, aws_secret_access_key = load_credentials_from_env(env_path)
    if aws_session_token is None:
        aws_session_token = os.getenv("AWS_SESSION_TOKEN") or None

    client_kwargs = {
        "aws_access_key_id": aws_access_key_id,
        "aws_secret_access_key": aws_secret_access_key,
    }
    if aws_session_token:
        client_kwargs["aws_session_token"] = aws_session_token
    if region is not None:
        client_kwargs["region_name"] = region

    return boto3.client(service_name, **client_kwargs)


def create_ec2_client(region: str, env_path: Optional[str] = None):
    """Create an EC2 client for the region the watched resource lives in.

    Credentials come from `env_path`, AWS_ENV_FILE or ~/.env, in that order.
    """
    return create_client("ec2", region, env_path=env_path)
