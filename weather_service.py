import structlog

import cwa_api as cwa_api
from errors import ConfigError, NotFoundError, ValidationError
from transform import extract_location, transform_forecast, transform_hazards

log = structlog.get_logger(__name__)


# Runs the shared validate -> fetch -> locate steps and returns (payload, location, city).
def _fetch_location(dataset_id, city, config, usage):
    if not config.cwa_api_key:
        raise ConfigError("Set CWA_API_KEY in the environment or the .env file")

    city = (city or "").strip()
    if not city:
        raise ValidationError(f"Path format: {usage}")

    payload = cwa_api.fetch_dataset(dataset_id, city, config)
    location = extract_location(payload)
    if location is None:
        log.info("location_not_found", dataset=dataset_id, city=city)
        raise NotFoundError(f"Unable to get weather data for {city}")
    return payload, location, city


def get_weather_36hr(city, config):
    """Today/tomorrow 36-hour forecast for one city (dataset F-C0032-001)."""
    payload, location, city = _fetch_location(
        cwa_api.FORECAST_36HR_DATASET,
        city,
        config,
        usage="/api/weather_36hr/:city, e.g. /api/weather_36hr/高雄市",
    )
    forecasts = transform_forecast(location)
    log.info("forecast_transformed", city=city, periods=len(forecasts))
    return {
        "city": location.get("locationName") or city,
        "updateTime": payload["records"].get("datasetDescription"),
        "forecasts": [f.to_dict() for f in forecasts],
    }


def get_weather_hazards(city, config):
    """Active weather warnings and advisories for one city (dataset W-C0033-001)."""
    _, location, city = _fetch_location(
        cwa_api.HAZARDS_DATASET,
        city,
        config,
        usage="/api/weather_hazards/:city, e.g. /api/weather_hazards/高雄市",
    )
    hazards = transform_hazards(location)
    log.info("hazards_transformed", city=city, hazards=len(hazards))
    return {
        "city": location.get("locationName") or city,
        "hazards": [h.to_dict() for h in hazards],
    }
