import logging
from config import SEARCH_LIMIT, TICKET_DEFAULTS_URL
from services.tdx import fetch_json, make_api_call
from logic.links import tdx_api_uri_to_app_url

log = logging.getLogger(__name__)

# What a search hit is trimmed down to; order matches the TDX ticket model.
SEARCH_RESULT_FIELDS = (
    "ID",
    "TypeName",
    "TypeCategoryName",
    "ClassificationName",
    "Title",
    "AccountName",
    "StatusName",
    "PriorityName",
    "CreatedDate",
    "ModifiedDate",
    "RequestorName",
    "RequestorEmail",
    "ResponsibleGroupName",
    "ServiceName",
    "ServiceOfferingName",
    "ServiceCategoryName",
    "Uri",
)


def get_ticket(
    ticket_id: int,
    auth_token: str,
    api_base_url: str,
    app_id: int,
    ignore_ssl_errors: bool = False,
):
    return make_api_call(
        api_base_url,
        f"/{app_id}/tickets/{ticket_id}",
        auth_token,
        method="GET",
        ignore_ssl_errors=ignore_ssl_errors,
    )


def search_tickets(
    search_text: str,
    auth_token: str,
    api_base_url: str,
    app_base_url: str,
    app_id: int,
    limit: int = SEARCH_LIMIT,
    ignore_ssl_errors: bool = False,
) -> list[dict]:
    """Search tickets and return at most ``limit`` slimmed-down hits.

    Hits keep the order TDX returned them in. ``Uri`` is rewritten from the API
    path to the ticket's page in the web app so it can be clicked.
    """
    results = make_api_call(
        api_base_url,
        f"/{app_id}/tickets/search",
        auth_token,
        method="POST",
        body={"searchText": search_text},
        ignore_ssl_errors=ignore_ssl_errors,
    )
    if not isinstance(results, list) or not results:
        log.debug("Ticket search %r returned nothing usable", search_text)
        return []

    tickets = []
    for hit in results[:limit]:
        hit = hit if isinstance(hit, dict) else {}
        ticket = {name: hit.get(name) for name in SEARCH_RESULT_FIELDS}
        ticket["Uri"] = tdx_api_uri_to_app_url(hit.get("Uri"), app_base_url)
        tickets.append(ticket)
    return tickets


def create_ticket(
    auth_token: str,
    api_base_url: str,
    app_id: int,
    ticket_data,
    ignore_ssl_errors: bool = False,
):
    # Requestors are not emailed about tickets created here.
    return make_api_call(
        api_base_url,
        f"/{app_id}/tickets?NotifyRequestor=false",
        auth_token,
        method="POST",
        body=ticket_data,
        ignore_ssl_errors=ignore_ssl_errors,
    )


def get_cloud_team_ticket_defaults(endpoint_url: str = TICKET_DEFAULTS_URL) -> dict:
    """Fetch the Cloud Team's default field values for new tickets.

    Served as static JSON, so no TDX token is involved.
    """
    return fetch_json(endpoint_url, headers={"Accept": "application/json"})
