# file: api.py
from flask import Flask, jsonify, request

from charity_nft.chain import MockChain, Tx
from charity_nft.config import configure_logging, load_config
from charity_nft.errors import UnknownFunctionError
from charity_nft.receipts import to_json_value


def _parse_transaction(item):
    if not isinstance(item, dict):
        raise ValueError("Each transaction must be an object")
    function = item.get("function")
    args = item.get("args", [])
    sender = item.get("sender")
    if not isinstance(function, str) or not isinstance(sender, str) or not isinstance(args, list):
        raise ValueError("Transaction needs 'function' (str), 'sender' (str) and 'args' (list)")
    return Tx.contract_call(function, args, sender)


def create_app(chain=None):
    app = Flask(__name__)
    app.config["CHAIN"] = chain or MockChain(load_config())

    def current_chain():
        return app.config["CHAIN"]

    # ================= WRITE =================

    @app.route("/blocks", methods=["POST"])
    def mine_block():
        """Apply a list of contract calls as one block and return the receipts"""
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or not isinstance(payload.get("transactions"), list):
            return jsonify({"error": "No transactions provided"}), 400

        try:
            transactions = [_parse_transaction(item) for item in payload["transactions"]]
            block = current_chain().mine_block(transactions)
        except UnknownFunctionError as e:
            return jsonify({"error": f"Unknown function {e}"}), 404
        except (ValueError, TypeError) as e:
            return jsonify({"error": str(e)}), 400

        return jsonify(block.to_json())

    # ================= READ =================

    @app.route("/read/<function>", methods=["POST"])
    def read_only(function):
        payload = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            return jsonify({"error": "Request body must be an object"}), 400
        args = payload.get("args", [])
        if not isinstance(args, list):
            return jsonify({"error": "'args' must be a list"}), 400

        try:
            value = current_chain().call_read_only(function, args)
        except UnknownFunctionError as e:
            return jsonify({"error": f"Unknown function {e}"}), 404
        except TypeError as e:
            return jsonify({"error": str(e)}), 400

        return jsonify({"result": to_json_value(value)})

    @app.route("/accounts", methods=["GET"])
    def list_accounts():
        chain = current_chain()
        return jsonify({
            name: {"address": acct.address, "balance": chain.get_balance(acct.address)}
            for name, acct in chain.accounts.items()
        })

    return app


if __name__ == "__main__":
    config = load_config()
    configure_logging(config.log_level)
    app = create_app(MockChain(config))
    app.run(host=config.api_host, port=config.api_port)
