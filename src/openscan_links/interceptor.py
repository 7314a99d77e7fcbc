"""JSON-RPC request interception for openscan-links."""

import logging
from typing import Any, Dict, Optional

from .config import ExplorerConfig
from .constants import LINK_LABEL_WIDTH
from .tracker import DeploymentTracker
from .utils import create_clickable_link

logger = logging.getLogger(__name__)


class RequestInterceptor:
    """
    Observes answered JSON-RPC requests.

    Deployment transactions and their receipts are forwarded to the
    deployment tracker; transactions, blocks and accounts are logged as
    clickable explorer links.
    """

    def __init__(self, tracker: Optional[DeploymentTracker], config: ExplorerConfig):
        self._tracker = tracker
        self._config = config

    def on_request(self, method: str, params: Any, response: Any) -> None:
        """
        Handle one request after the node has answered it.

        Args:
            method: JSON-RPC method name
            params: Request params
            response: JSON-RPC response object ({"result": ...})
        """
        result = response.get("result") if isinstance(response, dict) else None

        match method:
            case "eth_sendTransaction":
                self._on_send_transaction(params, result)
            case "eth_getTransactionReceipt":
                self._on_transaction_receipt(result)
            case "eth_accounts":
                self._on_accounts(result)
            case _:
                pass

    def explorer_url(self, kind: str, identifier: Any) -> str:
        return f"{self._config.url}/#/{self._config.chain_id}/{kind}/{identifier}"

    def _log_link(self, label: str, kind: str, identifier: Any) -> None:
        url = self.explorer_url(kind, identifier)
        logger.info("%s%s", label.ljust(LINK_LABEL_WIDTH), create_clickable_link(url))

    def _on_send_transaction(self, params: Any, tx_hash: Any) -> None:
        if not isinstance(tx_hash, str) or not tx_hash:
            return

        tx_params: Dict[str, Any] = {}
        if isinstance(params, list) and params and isinstance(params[0], dict):
            tx_params = params[0]

        # No "to" address means contract deployment
        data = tx_params.get("data")
        if self._tracker is not None and isinstance(data, str) and data and not tx_params.get("to"):
            self._tracker.track_send_transaction(tx_hash, data)

        self._log_link("  Transaction:", "tx", tx_hash)
        if tx_params.get("from"):
            self._log_link("  From:", "address", tx_params["from"])
        if tx_params.get("to"):
            self._log_link("  To:", "address", tx_params["to"])

    def _on_transaction_receipt(self, receipt: Any) -> None:
        if not isinstance(receipt, dict) or not receipt.get("blockNumber"):
            return

        try:
            block_number = int(receipt["blockNumber"], 16)
        except (TypeError, ValueError):
            return

        tx_hash = receipt.get("transactionHash")
        self._log_link("  Transaction:", "tx", tx_hash)
        self._log_link(f"  Block #{block_number}:", "block", block_number)
        self._log_link("  From:", "address", receipt.get("from"))
        if receipt.get("to"):
            self._log_link("  To:", "address", receipt["to"])

        contract_address = receipt.get("contractAddress")
        if isinstance(contract_address, str) and contract_address:
            if self._tracker is not None and isinstance(tx_hash, str) and tx_hash:
                self._tracker.track_deployment_receipt(tx_hash, contract_address)
            self._log_link("  Contract:", "address", contract_address)

        logger.info("")

    def _on_accounts(self, accounts: Any) -> None:
        if not isinstance(accounts, list) or not accounts:
            return

        for index, address in enumerate(accounts):
            self._log_link(f"  [{index}]:", "address", address)
        logger.info("")
