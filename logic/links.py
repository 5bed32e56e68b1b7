import re

_API_URI_RE = re.compile(r"api/(\d+)/(tickets|knowledgebase)/(\d+)")


def tdx_api_uri_to_app_url(uri: str | None, app_base_url: str) -> str:
    """Map a TDX API resource URI to the page a person would open in a browser.

    Tickets resolve under ``app_base_url``; knowledge base articles live in the
    client portal, so ``TDNext/Apps`` is swapped for ``TDClient`` first. Any
    other URI gives ``""``.
    """
    m = _API_URI_RE.search(uri or "")
    if not m:
        return ""
    app_id, kind, item_id = m.groups()
    if kind == "tickets":
        return f"{app_base_url}/{app_id}/Tickets/TicketDet.aspx?TicketID={item_id}"
    # I only swap the first literal hit; a base URL without it passes through as-is.
    portal_base = app_base_url.replace("TDNext/Apps", "TDClient", 1)
    return f"{portal_base}/{app_id}/Portal/KB/ArticleDet?ID={item_id}"
