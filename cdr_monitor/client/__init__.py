"""Client Module - Async access to the CDR backend"""

from .api_client import CDRAPIClient, CDRClientError, CDRResponseError

__all__ = ['CDRAPIClient', 'CDRClientError', 'CDRResponseError']
