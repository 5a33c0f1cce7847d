import logging

import uvicorn

from nullmap.nullmap_api.configuration.api import get_api_configuration


def main() -> None:
    configuration = get_api_configuration()
    logging.basicConfig(
        level=configuration.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info(
        f"Server is running on http://{configuration.host}:{configuration.port}"
    )
    uvicorn.run(
        "nullmap.nullmap_api.app:app",
        host=configuration.host,
        port=configuration.port,
        log_level=configuration.log_level.lower(),
    )


if __name__ == "__main__":
    main()
