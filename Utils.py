# SPDX-FileCopyrightText: 2024 Ondsel <development@ondsel.com>
#
# SPDX-License-Identifier: LGPL-2.0-or-later

import collections.abc
import dataclasses
import logging
import os
import sys
import typing

from errors import DecodeError

DEFAULT_API_URL = "https://api.inopenapp.com/api/v1"

DEBUG_LEVEL = logging.INFO

# key used in dataclass field metadata when the wire key differs from the field name
JSON_KEY = "json_key"


class __DashboardEnv:
    """
    Settings read once from `DASHBOARD_*` environment variables.

    The defaults point at the production API. There is no default token: the
    bearer token has to come from `DASHBOARD_API_TOKEN` or be passed to
    APIClient directly.

    Read settings through the `env` singleton below, e.g. `Utils.env.api_url`.
    """

    def __init__(self):
        self.api_url = os.environ.get("DASHBOARD_API_URL", DEFAULT_API_URL)
        self.api_token = os.environ.get("DASHBOARD_API_TOKEN")
        self.debug_level = os.environ.get("DASHBOARD_DEBUG_LEVEL", "info")
        self.log_raw_response = is_truthy(
            os.environ.get("DASHBOARD_LOG_RAW_RESPONSE", "false")
        )

    def get_debug_level(self):
        if self.debug_level == "info":
            return logging.INFO
        elif self.debug_level == "debug":
            return logging.DEBUG
        elif self.debug_level == "error":
            return logging.ERROR
        elif self.debug_level == "warning":
            return logging.WARNING
        else:
            return logging.INFO


def is_truthy(value):
    return str(value).strip().lower() in ["1", "true", "yes", "on"]


env = __DashboardEnv()


def getLogger(name):
    logger = logging.getLogger(name)
    logger.setLevel(env.get_debug_level())
    handler = logging.StreamHandler(sys.stderr)
    if env.get_debug_level() >= logging.INFO:
        formatter = logging.Formatter("%(levelname)s: %(message)s")
    else:
        formatter = logging.Formatter("%(levelname)s: %(name)s:%(lineno)d %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


# ========================
# JSON import
# ========================


def json_key(key):
    """field metadata for a field whose wire key differs from its name"""
    return {JSON_KEY: key}


def _wire_key(f):
    return f.metadata.get(JSON_KEY, f.name)


def _is_optional(tp):
    return typing.get_origin(tp) is typing.Union and type(None) in typing.get_args(
        tp
    )


def _convert(tp, value, path):
    origin = typing.get_origin(tp)

    if origin is typing.Union:
        if value is None and type(None) in typing.get_args(tp):
            return None
        options = [a for a in typing.get_args(tp) if a is not type(None)]
        return _convert(options[0], value, path)

    if origin is tuple:
        if not isinstance(value, list):
            raise DecodeError(f"{path}: expected an array, got {type(value).__name__}")
        item_type = typing.get_args(tp)[0]
        return tuple(
            _convert(item_type, item, f"{path}[{i}]") for i, item in enumerate(value)
        )

    if origin is dict:
        if not isinstance(value, dict):
            raise DecodeError(f"{path}: expected an object, got {type(value).__name__}")
        key_type, value_type = typing.get_args(tp)
        return {
            _convert(key_type, k, path): _convert(value_type, v, f"{path}.{k}")
            for k, v in value.items()
        }

    if dataclasses.is_dataclass(tp):
        return import_json_strict(tp, value, path)

    # bool is a subclass of int in Python but not in JSON
    if tp is bool:
        ok = isinstance(value, bool)
    elif tp is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif tp is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        if ok:
            value = float(value)
    else:
        ok = isinstance(value, tp)
    if not ok:
        raise DecodeError(
            f"{path}: expected {tp.__name__}, got {type(value).__name__}"
        )
    return value


def import_json_strict(cls, json_data, path=None):
    """Build a dataclass from json, rejecting missing keys and wrong types.

    Extra keys are ignored. Fields declared with ``init=False`` are not read
    from the json. A key may be absent only when the field is Optional.
    """
    path = path or cls.__name__
    if not isinstance(json_data, dict):
        raise DecodeError(
            f"{path}: expected an object, got {type(json_data).__name__}"
        )
    hints = typing.get_type_hints(cls)
    kwargs = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        key = _wire_key(f)
        tp = hints[f.name]
        if key not in json_data:
            if _is_optional(tp):
                kwargs[f.name] = None
                continue
            raise DecodeError(f"{path}: missing key '{key}'")
        kwargs[f.name] = _convert(tp, json_data[key], f"{path}.{key}")
    return cls(**kwargs)


def export_json(obj):
    """reverse of import_json_strict: dataclass -> dict keyed by wire names"""
    if dataclasses.is_dataclass(obj):
        return {
            _wire_key(f): export_json(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
            if f.init
        }
    elif isinstance(obj, (list, tuple)):
        return [export_json(item) for item in obj]
    elif isinstance(obj, collections.abc.Mapping):
        return {k: export_json(v) for k, v in obj.items()}
    return obj
