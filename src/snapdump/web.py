"""HTTP front end serving snapshot reports as HTML pages."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, PlainTextResponse

from .analysis import generate_summary_html
from .snapshot_source import FileSnapshotSource, SnapshotLoadError

logger = logging.getLogger(__name__)

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<title>Memory Snapshot Analysis</title>
</head>
<body>
<h1>Memory Snapshot Analysis</h1>
{0}
</body>
</html>"""


def create_app() -> FastAPI:
    app = FastAPI(title="snapdump", description="Memory snapshot analysis reports")

    @app.get("/")
    def summary(path: Optional[str] = None):
        """Render the full report for the snapshot file at ``path``."""
        if not path or not path.strip():
            return PlainTextResponse("No 'path' specified in Query String")

        logger.info("Rendering report for %s", path)
        try:
            body = generate_summary_html(FileSnapshotSource(path))
        except SnapshotLoadError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return HTMLResponse(HTML_TEMPLATE.format(body))

    return app
