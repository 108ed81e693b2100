"""Contract gateway interface and implementations."""

from beamdex.gateway.base import ContractGateway, OperationHandle, OperationStatus
from beamdex.gateway.jsonrpc import JsonRpcGateway, JsonRpcOperation, operation_status_from_info
from beamdex.gateway.mock import MockContractGateway, MockOperation, RecordedCall

__all__ = [
    "ContractGateway",
    "JsonRpcGateway",
    "JsonRpcOperation",
    "MockContractGateway",
    "MockOperation",
    "OperationHandle",
    "OperationStatus",
    "RecordedCall",
    "operation_status_from_info",
]
