"""SDK facade: one session shared by one wrapper per contract kind."""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from .chains import get_chain_by_id, get_transport
from .config import describe_config, prepare_config
from .contracts import Controller, Erc20, Vault, VaultFactory
from .contracts.base import Params, SessionAccessors, bind_session
from .logs import logged
from .resolver import resolve
from .session import Session
from .types import Config, ContractType, ResolvedParams


class BonkersSDK(SessionAccessors):
    """Entry point of the SDK.

    Example:
        ```python
        from bonkers import BonkersSDK, Config
        from bonkers.chains import base_sepolia

        sdk = BonkersSDK(
            Config(mode="server", options={"private_key": "0x...", "chains": [base_sepolia]})
        )
        params = await sdk.get_params(base_sepolia.id, "0x...", ContractType.VAULT)
        info = await sdk.vault(params).get_vault_info()
        ```

    Args:
        config: SDK config.
        session: Session to share. A new one is created when omitted.
    """

    def __init__(
        self,
        config: Union[Config, dict[str, Any]],
        *,
        session: Optional[Session] = None,
    ) -> None:
        self.config = prepare_config(config)
        self.mode = self.config.mode
        self.logger = self.config.logger or logging.getLogger(__name__)
        self.session = bind_session(self.config, session)
        self.logger.info("SDK initialized: %s", describe_config(self.config))

        self._controller = Controller(self.config, session=self.session)
        self._vault = Vault(self.config, session=self.session)
        self._vault_factory = VaultFactory(self.config, session=self.session)

    def controller(self, params: Params = None) -> Controller:
        """The shared Controller wrapper, rebound to ``params`` when given."""
        if params is not None:
            self._controller.bind(params)
        return self._controller

    def vault(self, params: Params = None) -> Vault:
        if params is not None:
            self._vault.bind(params)
        return self._vault

    def vault_factory(self, params: Params = None) -> VaultFactory:
        if params is not None:
            self._vault_factory.bind(params)
        return self._vault_factory

    def erc20(self, token_address: Optional[str] = None) -> Erc20:
        """A new ERC-20 wrapper on the shared session."""
        return Erc20(self.config, token_address, session=self.session)

    @logged
    async def get_params(
        self, chain_id: int, address: str, contract_type: Union[ContractType, str]
    ) -> ResolvedParams:
        """Resolve address and ABI of a contract of the given type."""
        chain = get_chain_by_id(self.config, chain_id)
        return await resolve(address, chain, contract_type, get_transport(self.config, chain_id))
