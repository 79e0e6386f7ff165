"""Config validation and normalization."""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from .chains import get_default_transports
from .errors import InvalidSDKMode, MissingRequiredParams
from .types import MODE_CLIENT, MODE_SERVER, ClientOptions, Config, ServerOptions

PACKAGE_LOGGER_NAME = "bonkers"


def get_default_logger() -> logging.Logger:
    return logging.getLogger(PACKAGE_LOGGER_NAME)


def check_mode(mode: Any) -> None:
    if mode not in (MODE_CLIENT, MODE_SERVER):
        raise InvalidSDKMode(f"Invalid SDK Mode [{mode}], Expected one of: {MODE_CLIENT}, {MODE_SERVER}")


def prepare_config(config: Union[Config, dict[str, Any]]) -> Config:
    """Validate a config and fill in its defaults.

    Server configs without transports get one default transport per chain
    (the chain's first RPC url). A missing logger defaults to the package
    logger. Preparing an already prepared config returns an equivalent config.

    Args:
        config: A Config or a dict accepted by Config.

    Returns:
        The prepared Config.

    Raises:
        InvalidSDKMode: If the mode is neither "client" nor "server".
        MissingRequiredParams: If the mode's required options are absent.
    """
    check_mode(config.mode if isinstance(config, Config) else config.get("mode"))
    if not isinstance(config, Config):
        config = Config.model_validate(config)

    if config.mode == MODE_CLIENT:
        options = config.options
        if not isinstance(options, ClientOptions) or options.wallet_config is None:
            raise MissingRequiredParams("Missing Wallet Config")
    else:
        options = config.options
        if not isinstance(options, ServerOptions) or not options.private_key:
            raise MissingRequiredParams("Missing PrivateKey")
        if not options.chains:
            raise MissingRequiredParams("Must Have At Least 1 Chain")
        if not options.transports:
            options.transports = get_default_transports(options.chains)

    if config.logger is None:
        config = config.model_copy(update={"logger": get_default_logger()})
    return config


def censor(value: Optional[str], visible: int = 4) -> str:
    """Mask a secret so it can be logged.

    Example:
        >>> censor("0x4c0883a69102937d6231471b5dbb6204fe512961708279f2e3e8a5d4b8e3e4d1")
        '0x4c...e4d1'
    """
    if not value:
        return ""
    if len(value) <= visible * 2:
        return "*" * len(value)
    return f"{value[:visible]}...{value[-visible:]}"


def describe_config(config: Config) -> dict[str, Any]:
    """Loggable summary of a config with secrets censored."""
    summary: dict[str, Any] = {"mode": config.mode}
    options = config.options
    if isinstance(options, ServerOptions):
        summary["private_key"] = censor(options.private_key)
        summary["chains"] = [chain.id for chain in options.chains]
    elif isinstance(options, ClientOptions) and options.wallet_config is not None:
        summary["chains"] = [chain.id for chain in options.wallet_config.chains]
        summary["connectors"] = len(options.wallet_config.connectors)
    return summary
