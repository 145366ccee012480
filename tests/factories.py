"""Builders for Strong backend payloads and a fake backend shared by the tests."""

import json

import httpx

from strong_mcp.strong.models import CellSet, CellSetGroup, Log, MeasurementsResponse


def cell(cell_type: str, value=None, id: str | None = None) -> dict:
    return {"id": id or f"c-{cell_type.lower()}", "cellType": cell_type, "value": value}


def cell_set_json(id: str, *cells: dict) -> dict:
    return {"id": id, "cells": list(cells)}


def group_json(id: str, *cell_sets: dict, measurement: str | None = None) -> dict:
    links = {"measurement": {"href": measurement}} if measurement is not None else {}
    return {"id": id, "_links": links, "cellSets": list(cell_sets)}


def log_json(
    id: str,
    *groups: dict,
    name: dict | None = None,
    start: str | None = "2024-03-01T10:00:00Z",
    end: str | None = "2024-03-01T11:15:30.500Z",
    timezone: str | None = "Europe/Berlin",
) -> dict:
    return {
        "id": id,
        "name": name,
        "timezoneId": timezone,
        "startDate": start,
        "endDate": end,
        "logType": "WORKOUT",
        "_embedded": {"cellSetGroup": list(groups)},
    }


def measurement_json(id: str, en: str | None = None, custom: str | None = None) -> dict:
    return {
        "id": id,
        "name": {"en": en, "custom": custom},
        "_links": {"self": {"href": f"/api/measurements/{id}"}},
        "measurementType": "EXERCISE",
        "isGlobal": True,
    }


def page_json(total: int, *measurements: dict, next_href: str | None = None) -> dict:
    links = {"self": {"href": "/api/measurements?page=1"}}
    if next_href:
        links["next"] = {"href": next_href}
    return {"total": total, "_links": links, "_embedded": {"measurement": list(measurements)}}


def make_cell_set(id: str, *cells: dict) -> CellSet:
    return CellSet.model_validate(cell_set_json(id, *cells))


def make_group(id: str, *cell_sets: dict, measurement: str | None = None) -> CellSetGroup:
    return CellSetGroup.model_validate(group_json(id, *cell_sets, measurement=measurement))


def make_log(id: str, *groups: dict, **kwargs) -> Log:
    return Log.model_validate(log_json(id, *groups, **kwargs))


def make_page(total: int, *measurements: dict) -> MeasurementsResponse:
    return MeasurementsResponse.model_validate(page_json(total, *measurements))


class FakeBackend:
    """Minimal stand-in for the Strong backend, recording every request."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.tokens = iter(["token-1", "token-2", "token-3"])
        self.valid_token = None
        self.expire_next = False
        self.pages = {
            1: page_json(10, measurement_json("m1", "Squat"), measurement_json("m2", "Bench"),
                         next_href="/api/measurements?page=2"),
            2: page_json(10, measurement_json("m3", "Row")),
        }
        self.user = {"id": "user-1", "_embedded": {"log": [log_json("w1")]}}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/auth/login":
            body = json.loads(request.content)
            if body["password"] != "secret":
                return httpx.Response(401, json={"code": "INVALID_CREDENTIALS", "description": "Bad login"})
            return self._issue()
        if path == "/auth/login/refresh":
            if json.loads(request.content)["refreshToken"] != "refresh":
                return httpx.Response(401, json={"code": "INVALID_TOKEN", "description": "nope"})
            return self._issue()

        if self.expire_next or request.headers.get("Authorization") != f"Bearer {self.valid_token}":
            self.expire_next = False
            return httpx.Response(401, json={"code": "UNAUTHORIZED", "description": "Token expired"})
        if path == "/api/users/user-1":
            return httpx.Response(200, json=self.user)
        if path == "/api/measurements":
            return httpx.Response(200, json=self.pages[int(request.url.params["page"])])
        return httpx.Response(404, json={"code": "NOT_FOUND", "description": f"No route {path}"})

    def _issue(self) -> httpx.Response:
        self.valid_token = next(self.tokens)
        return httpx.Response(
            200, json={"accessToken": self.valid_token, "refreshToken": "refresh", "userId": "user-1"},
        )

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

