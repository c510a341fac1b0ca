import logging

from fastapi import HTTPException, status

from courseboard.repositories.classroom_repo import UpstreamError

log = logging.getLogger("courseboard.upstream")


def upstream_failed(e: UpstreamError) -> HTTPException:
    """Errore del servizio remoto -> 502 con il messaggio originale."""
    log.exception("Chiamata al servizio classroom fallita", exc_info=e)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
