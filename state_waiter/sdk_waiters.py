"""
boto3 waiter wrappers driven by the shared WaitPolicy.

SDK waiters take a max attempt count instead of a timeout; the policy
converts one into the other so these waits honor the same
AWS_POLL_DELAY_SECONDS / AWS_TIMEOUT_SECONDS overrides as wait_for_state.
"""

from __future__ import annotations

from typing import Optional

from .wait_policy import WaitPolicy, WaitSettings


def _waiter_config(policy: Optional[WaitPolicy]) -> dict:
    if policy is None:
        policy = WaitSettings.from_env().policy()
    # boto3 stops after one check when MaxAttempts is 0.
    return {"Delay": policy.poll_interval, "MaxAttempts": max(1, policy.max_attempts)}


def wait_until_ami_available(ec2_client, ami_id: str, policy: Optional[WaitPolicy] = None):
    """
    Wait for an AMI to reach available state.

    Args:
        ec2_client: Boto3 EC2 client
        ami_id: AMI ID to wait for
        policy: Polling delay and timeout (default: resolved from the environment)

    Raises:
        WaiterError: If waiter times out or encounters an error
    """
    waiter = ec2_client.get_waiter("image_available")
    waiter.wait(ImageIds=[ami_id], WaiterConfig=_waiter_config(policy))


def wait_until_instance_terminated(
    ec2_client, instance_id: str, policy: Optional[WaitPolicy] = None
):
    """Wait for an instance to reach terminated state. Raises WaiterError on failure."""
    waiter = ec2_client.get_waiter("instance_terminated")
    waiter.wait(InstanceIds=[instance_id], WaiterConfig=_waiter_config(policy))


def wait_until_spot_request_fulfilled(
    ec2_client, spot_request_id: str, policy: Optional[WaitPolicy] = None
):
    """Wait for a spot instance request to be fulfilled.

    Works for both requesting and cancelling spot instances.
    """
    waiter = ec2_client.get_waiter("spot_instance_request_fulfilled")
    waiter.wait(SpotInstanceRequestIds=[spot_request_id], WaiterConfig=_waiter_config(policy))


def wait_until_volume_available(ec2_client, volume_id: str, policy: Optional[WaitPolicy] = None):
    """Wait for a volume to reach available state. Raises WaiterError on failure."""
    waiter = ec2_client.get_waiter("volume_available")
    waiter.wait(VolumeIds=[volume_id], WaiterConfig=_waiter_config(policy))
