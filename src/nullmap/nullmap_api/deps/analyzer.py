from fastapi import Depends

from nullmap.nullmap_api.configuration.api import ApiConfiguration, get_api_configuration
from nullmap.shared.analyser import TableNullAnalyzer


def get_analyzer(
    configuration: ApiConfiguration = Depends(get_api_configuration),
) -> TableNullAnalyzer:
    """Build the analyzer for the current request from the injected configuration."""
    return TableNullAnalyzer(configuration)
