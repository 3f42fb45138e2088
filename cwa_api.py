import requests
import structlog
from requests.exceptions import RequestException

from errors import MalformedDataError, ServerError, UpstreamError

DATASTORE_PATH = "/v1/rest/datastore"
FORECAST_36HR_DATASET = "F-C0032-001"
HAZARDS_DATASET = "W-C0033-001"

log = structlog.get_logger(__name__)


# Hides all but the first few characters of the API key in log output.
def _mask(secret):
    if not secret:
        return None
    return secret[:4] + "***"


# Parses an upstream body as JSON, falling back to the raw text.
def _body_of(response):
    try:
        return response.json()
    except ValueError:
        return response.text


# Issues one GET against a CWA datastore dataset and returns the parsed JSON payload.
def fetch_dataset(dataset_id: str, location_name: str, config):
    """
    GET <base>/v1/rest/datastore/<dataset_id>?Authorization=...&locationName=...

    Raises UpstreamError when CWA answers with a non-2xx status (status and body are
    carried along), ServerError when no response arrives at all, and
    MalformedDataError when a 2xx body is not JSON.
    """
    url = f"{config.cwa_api_base_url}{DATASTORE_PATH}/{dataset_id}"
    params = {
        "Authorization": config.cwa_api_key,
        "locationName": location_name,
    }
    log.info(
        "upstream_request",
        dataset=dataset_id,
        location=location_name,
        authorization=_mask(config.cwa_api_key),
        proxied=config.proxies is not None,
    )

    try:
        response = requests.get(
            url,
            params=params,
            timeout=config.request_timeout,
            proxies=config.proxies,
        )
    except RequestException as e:
        log.error("upstream_unreachable", dataset=dataset_id, error=str(e))
        raise ServerError("Unable to reach the CWA API, please try again later") from e

    if response.status_code // 100 != 2:
        body = _body_of(response)
        message = None
        if isinstance(body, dict):
            message = body.get("message")
        log.error("upstream_http_error", dataset=dataset_id, status=response.status_code)
        raise UpstreamError(
            response.status_code,
            message or "Unable to fetch data from the CWA API",
            details=body,
        )

    try:
        return response.json()
    except ValueError as e:
        raise MalformedDataError(f"CWA API returned a non-JSON body for {dataset_id}") from e
