from urllib.parse import urlencode, urljoin, urlsplit

WEBHOOK_PATH = "/api/v1/webhook/soisy"


class UrlBuilder:
    """Builds absolute site URLs for redirects and the Soisy callback."""

    def __init__(self, site_url: str):
        self.site_url = site_url.rstrip("/") + "/"

    def url(self, path: str | None) -> str:
        if not path:
            return self.site_url
        if urlsplit(path).scheme:
            return path
        return urljoin(self.site_url, path.lstrip("/"))

    def webhook_url(self, secret: str | None = None) -> str:
        url = self.url(WEBHOOK_PATH)
        if secret:
            url = f"{url}?{urlencode({'secret': secret})}"
        return url
