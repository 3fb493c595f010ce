from aws_lambda_powertools.event_handler import CORSConfig

from services.shared.config import Settings


def build_cors_config(settings: Settings) -> CORSConfig:
    """Allow only the configured frontend origins, with credentials"""
    origins = list(settings.client_urls)
    if not origins:
        return CORSConfig(allow_origin="*", allow_credentials=False)
    return CORSConfig(
        allow_origin=origins[0],
        extra_origins=origins[1:],
        allow_credentials=True,
        max_age=600,
    )
