# custom_components/toronto_zmanim/http.py
"""Public JSON endpoint: GET /api/zmanim?mode=today|week|shabbat&date=<ISO date>."""

from __future__ import annotations

import logging
from http import HTTPStatus

from aiohttp import web

from homeassistant.components.http import HomeAssistantView
from homeassistant.core import HomeAssistant
import homeassistant.util.dt as dt_util

from .const import DATA_CALCULATOR, DOMAIN
from .zmanim_lib import InvalidRequestError, ZmanimError
from .zmanim_lib.api import CACHE_MAX_AGE, build_payload

_LOGGER = logging.getLogger(__name__)


class ZmanimView(HomeAssistantView):
    """Read-only zmanim feed; no authentication, no request body."""

    url = "/api/zmanim"
    name = "api:zmanim"
    requires_auth = False

    def __init__(self, hass: HomeAssistant) -> None:
        self._hass = hass

    async def get(self, request: web.Request) -> web.Response:
        calculator = self._hass.data.get(DOMAIN, {}).get(DATA_CALCULATOR)
        if calculator is None:
            return self.json_message(
                "Zmanim are not configured", HTTPStatus.SERVICE_UNAVAILABLE
            )

        query = dict(request.query)
        try:
            payload = await self._hass.async_add_executor_job(
                build_payload, calculator, query, dt_util.now()
            )
        except InvalidRequestError as err:
            _LOGGER.warning("Rejected zmanim request %s: %s", query, err)
            return self.json({"error": str(err)}, HTTPStatus.BAD_REQUEST)
        except ZmanimError:
            _LOGGER.exception("Error calculating zmanim for %s", query)
            return self.json(
                {"error": "Failed to calculate zmanim"},
                HTTPStatus.INTERNAL_SERVER_ERROR,
            )

        return self.json(
            payload,
            headers={"Cache-Control": f"public, max-age={CACHE_MAX_AGE}"},
        )
