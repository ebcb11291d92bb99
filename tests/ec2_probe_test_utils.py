"""Builders for EC2 describe_* responses and errors used by probe tests."""

from __future__ import annotations

from botocore.exceptions import ClientError


def client_error(code: str, operation: str = "DescribeImages") -> ClientError:
    """Build a botocore ClientError with the given error code."""
    return ClientError({"Error": {"Code": code, "Message": f"{code} message"}}, operation)


def instances_response(*states: str) -> dict:
    """describe_instances response with one reservation per state."""
    return {
        "Reservations": [
            {"Instances": [{"InstanceId": f"i-{idx:04d}", "State": {"Name": state}}]}
            for idx, state in enumerate(states)
        ]
    }
