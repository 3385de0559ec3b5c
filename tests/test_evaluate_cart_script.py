import importlib.util
import json
from decimal import Decimal
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "evaluate_cart.py"


@pytest.fixture
def script(monkeypatch):
    spec = importlib.util.spec_from_file_location("evaluate_cart", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    # keep the root logger untouched, pytest captures stdout per test
    monkeypatch.setattr(module, "setup_logging", lambda level=None: None)
    return module


@pytest.fixture
def files(tmp_path):
    cart = {"items": [
        {"productId": 1, "quantity": 2, "unitPrice": 100},
        {"productId": 2, "quantity": 1, "unitPrice": 50},
    ]}
    coupons = [
        {"id": "cart-10", "code": "CART10", "type": "CART",
         "details": {"threshold": 100, "discountType": "PERCENT", "discountValue": 10}},
        {"id": "dead", "code": "DEAD", "type": "CART", "active": False,
         "details": {"threshold": 0, "discountType": "FLAT", "discountValue": 99}},
    ]
    cart_path = tmp_path / "cart.json"
    coupons_path = tmp_path / "coupons.json"
    cart_path.write_text(json.dumps(cart))
    coupons_path.write_text(json.dumps(coupons))
    return str(cart_path), str(coupons_path)


def test_lists_applicable_coupons(script, files, capsys):
    cart_path, coupons_path = files

    assert script.main(["--cart", cart_path, "--coupons", coupons_path, "--log-level", "WARNING"]) == 0

    out = json.loads(capsys.readouterr().out)
    assert [row["coupon_id"] for row in out["applicable_coupons"]] == ["cart-10"]
    assert out["applicable_coupons"][0]["discount"] == "25.000000"


def test_applies_coupon(script, files, capsys):
    cart_path, coupons_path = files

    assert script.main(["--cart", cart_path, "--coupons", coupons_path, "--apply", "cart-10",
                        "--log-level", "WARNING"]) == 0

    updated = json.loads(capsys.readouterr().out)["updated_cart"]
    assert updated["total_price"] == "250"
    assert updated["final_price"] == "225.000000"
    assert [item["totalDiscount"] for item in updated["items"]] == ["20.000000", "5.000000"]


def test_unknown_coupon_id(script, files):
    cart_path, coupons_path = files
    assert script.main(["--cart", cart_path, "--coupons", coupons_path, "--apply", "nope",
                        "--log-level", "WARNING"]) == 1


def test_script_logger_is_named_after_module(script):
    assert script.logger.name == "evaluate_cart"


def test_prices_are_read_exactly(script, tmp_path):
    path = tmp_path / "cart.json"
    path.write_text('{"items": [{"productId": 1, "quantity": 1, "unitPrice": 0.1000000000000000000001}]}')

    data = script.load_json(str(path))

    assert data["items"][0]["unitPrice"] == Decimal("0.1000000000000000000001")
