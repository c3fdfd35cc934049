class PollingError(Exception):
    """Base exception for client-side status polling."""


class StatusFetchError(PollingError):
    """A single status fetch failed (network, timeout, bad response).

    Never a pipeline failure: the coordinator keeps polling.
    """
