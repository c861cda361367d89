"""Domain error taxonomy.

Validation errors are raised before any network call. Transport errors from
collaborators (requests, spotipy) are never wrapped in these types; they reach
the caller unchanged. "No match" is not an error: resolution returns None.
"""


class TrackBridgeError(Exception):
    """Base class for errors raised by trackbridge itself."""


class MissingInputError(TrackBridgeError, ValueError):
    """A required argument or field is absent or empty."""


class WrongShapeError(TrackBridgeError, TypeError):
    """A required argument or field is present but of the wrong type or schema."""


class CredentialExchangeError(TrackBridgeError):
    """The token endpoint answered without a usable access token.

    Terminal for the credential renewal chain: no further automatic renewal
    is attempted after this is raised.
    """
