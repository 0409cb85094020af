class StoreUnavailable(Exception):
    """
    Raised when the database could not answer a read.

    Distinct from "nothing found": callers must not treat it as an empty result.
    """

    def __init__(self, message: str = "Schedule temporarily unavailable"):
        super().__init__(message)
        self.message = message


class RateLimited(Exception):
    """
    Raised when a client exceeded the submission quota of a bucket.

    Args:
        retry_after (int): Seconds until the current window resets.
    """

    def __init__(self, bucket: str, retry_after: int):
        super().__init__(f"Rate limit exceeded for {bucket}")
        self.bucket = bucket
        self.retry_after = retry_after
