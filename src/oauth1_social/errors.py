class OAuth1SocialError(Exception):
    pass


class MissingVerifierError(OAuth1SocialError, ValueError):
    def __init__(self, message: str = "Invalid request. Missing OAuth verifier."):
        super().__init__(message)


class MissingCredentialsError(OAuth1SocialError):
    def __init__(self, message: str = "Missing temporary credentials."):
        super().__init__(message)


class ConfigurationError(OAuth1SocialError):
    pass
