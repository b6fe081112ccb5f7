"""Static file serving for the built web UI with single-page-app fallback."""

from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope


class SinglePageAppStaticFiles(StaticFiles):
    """Serves ``index.html`` for any path that is not a real file.

    Client-side routes like ``/messages/42`` then load the app instead of 404.
    """

    def __init__(self, directory: str, index: str = "index.html"):
        super().__init__(directory=directory, html=True)
        self._index = index

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response(self._index, scope)
