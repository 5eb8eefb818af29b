from .client import ReceiptApiClient, mock_receipt_response
from .manager import DownloadAction, GENERATE_ERROR_MESSAGE, ReceiptManager, is_expired

__all__ = [
    "ReceiptApiClient",
    "mock_receipt_response",
    "DownloadAction",
    "GENERATE_ERROR_MESSAGE",
    "ReceiptManager",
    "is_expired",
]
