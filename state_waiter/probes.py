"""
Status probes for watched EC2 resources.

A probe answers one question: what is this resource's status right now?
poll() returns a ProbeResult whose shape carries the answer:

    ProbeResult(resource, state)    resource exists and reports `state`
    ProbeResult.not_found()         resource could not be located
    ProbeResult.failed(exc)         the status query itself failed

EC2 probes absorb transient network failures and "does not exist yet"
error codes as not-found, so the poll driver never needs to retry.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, NamedTuple, Optional

from botocore.exceptions import (
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

TRANSIENT_NETWORK_ERRORS = (
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)


class ProbeResult(NamedTuple):
    """Outcome of a single poll."""

    resource: Any = None
    state: str = ""
    error: Optional[BaseException] = None

    @classmethod
    def not_found(cls) -> "ProbeResult":
        return cls(None, "", None)

    @classmethod
    def failed(cls, error: BaseException) -> "ProbeResult":
        return cls(None, "", error)

    @property
    def found(self) -> bool:
        return self.resource is not None


class StateProbe(ABC):  # pylint: disable=too-few-public-methods
    """Queries the current status of one watched resource."""

    @abstractmethod
    def poll(self) -> ProbeResult:
        """Return the resource's current status."""


class FunctionProbe(StateProbe):  # pylint: disable=too-few-public-methods
    """Adapts a zero-argument callable to the StateProbe interface.

    The callable may return a ProbeResult or a plain (resource, state, error)
    triple.
    """

    def __init__(self, fn: Callable[[], Any]):
        self.fn = fn

    def poll(self) -> ProbeResult:
        result = self.fn()
        if isinstance(result, ProbeResult):
            return result
        resource, state, error = result
        return ProbeResult(resource, state or "", error)


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


class Ec2DescribeProbe(StateProbe):
    """Probe backed by a single EC2 describe_* call for one resource id.

    Subclasses name the describe operation, its id parameter, the response
    collection holding the resource, and the error codes meaning
    "not found yet".
    """

    operation: str = ""
    id_param: str = ""
    collection_key: str = ""
    state_key: str = "State"
    not_found_codes: tuple[str, ...] = ()

    def __init__(self, ec2_client, resource_id: str):
        self.ec2_client = ec2_client
        self.resource_id = resource_id

    def _describe(self) -> dict:
        describe = getattr(self.ec2_client, self.operation)
        return describe(**{self.id_param: [self.resource_id]})

    def _resources(self, response: dict) -> list:
        return response.get(self.collection_key) or []

    def _state_of(self, resource: dict) -> str:
        return resource.get(self.state_key) or ""

    def poll(self) -> ProbeResult:
        try:
            response = self._describe()
        except ClientError as exc:
            if self.not_found_codes and _error_code(exc).startswith(self.not_found_codes):
                logging.debug("%s %s not found yet: %s", self.operation, self.resource_id, exc)
                return ProbeResult.not_found()
            logging.error("Error on %s for %s: %s", self.operation, self.resource_id, exc)
            return ProbeResult.failed(exc)
        except TRANSIENT_NETWORK_ERRORS as exc:
            logging.warning("Transient network error polling %s: %s", self.resource_id, exc)
            return ProbeResult.not_found()

        resources = self._resources(response)
        if not resources:
            return ProbeResult.not_found()
        resource = resources[0]
        return ProbeResult(resource, self._state_of(resource))


class AmiProbe(Ec2DescribeProbe):
    """Machine image: pending -> available | failed."""

    operation = "describe_images"
    id_param = "ImageIds"
    collection_key = "Images"
    not_found_codes = ("InvalidAMIID.NotFound",)


class InstanceProbe(Ec2DescribeProbe):
    """Compute instance: pending -> running -> stopping -> stopped, etc."""

    operation = "describe_instances"
    id_param = "InstanceIds"
    collection_key = "Reservations"
    not_found_codes = ("InvalidInstanceID.NotFound",)

    def _resources(self, response: dict) -> list:
        instances = []
        for reservation in response.get("Reservations") or []:
            instances.extend(reservation.get("Instances") or [])
        return instances

    def _state_of(self, resource: dict) -> str:
        return (resource.get("State") or {}).get("Name", "")


class VolumeProbe(Ec2DescribeProbe):
    """Block volume: creating -> available -> in-use, etc."""

    operation = "describe_volumes"
    id_param = "VolumeIds"
    collection_key = "Volumes"
    not_found_codes = ("InvalidVolume.NotFound",)


class SpotRequestProbe(Ec2DescribeProbe):
    """Spot instance request: open -> active | cancelled | closed | failed."""

    operation = "describe_spot_instance_requests"
    id_param = "SpotInstanceRequestIds"
    collection_key = "SpotInstanceRequests"
    not_found_codes = ("InvalidSpotInstanceRequestID.NotFound",)


class ImportImageTaskProbe(Ec2DescribeProbe):
    """VM import task: active -> completed | deleted."""

    operation = "describe_import_image_tasks"
    id_param = "ImportTaskIds"
    collection_key = "ImportImageTasks"
    state_key = "Status"
    not_found_codes = ("InvalidConversionTaskId",)


PROBES_BY_KIND: dict[str, type[Ec2DescribeProbe]] = {
    "ami": AmiProbe,
    "instance": InstanceProbe,
    "volume": VolumeProbe,
    "spot-request": SpotRequestProbe,
    "import-image": ImportImageTaskProbe,
}
