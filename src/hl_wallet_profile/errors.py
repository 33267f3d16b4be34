class FillSourceError(RuntimeError):
    """A fill source could not deliver fills (base for fallback handling)."""
    pass

class HLRequestError(FillSourceError):
    pass

class HLRateLimitError(HLRequestError):
    """Still rate limited (429) after all retries."""
    pass

class FixtureError(FillSourceError):
    """Fixture file missing or not a JSON array of fill records."""
    pass

class RedshiftQueryError(FillSourceError):
    pass
