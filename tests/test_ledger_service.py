from datetime import date

import pytest

from app.core.exceptions import InvalidInputError, NotFound, ValidationError
from app.services import LedgerService, RecordService
from app.stores import EntityKind


def _rice(store, quantity=10, **extra):
    return LedgerService.create_product(store, {"name": "Rice", "quantity": quantity, **extra})


class TestProducts:

    def test_create_defaults_quantity_to_zero(self, store):
        product = LedgerService.create_product(store, {"name": "Salt"})
        assert product["quantity"] == 0
        assert product["costPrice"] is None

    def test_create_requires_name(self, store):
        with pytest.raises(ValidationError):
            LedgerService.create_product(store, {"quantity": 4})

    def test_duplicate_name_rejected_regardless_of_other_fields(self, store):
        _rice(store)
        for payload in (
            {"name": "Rice"},
            {"name": "Rice", "quantity": 99},
            {"name": "Rice", "supplier": "Elsewhere", "costPrice": 1.5},
        ):
            with pytest.raises(ValidationError, match="already exists"):
                LedgerService.create_product(store, payload)
        assert store.count(EntityKind.PRODUCT) == 1

    def test_get_missing_product(self, store):
        with pytest.raises(NotFound):
            LedgerService.get_product(store, "Ghost")

    def test_delete_keeps_records(self, store):
        _rice(store)
        RecordService.create_record(store, "outgoing", {"name": "Rice", "quantity": 2})
        LedgerService.delete_product(store, "Rice")
        assert store.count(EntityKind.PRODUCT) == 0
        assert len(RecordService.list_records(store)) == 1

    def test_delete_missing_product(self, store):
        with pytest.raises(NotFound):
            LedgerService.delete_product(store, "Ghost")


class TestQuantityChange:

    def test_changes_compose_additively(self, store):
        _rice(store)
        assert LedgerService.apply_quantity_change(store, "Rice", -3)["quantity"] == 7
        assert LedgerService.apply_quantity_change(store, "Rice", 20)["quantity"] == 27
        assert LedgerService.get_product(store, "Rice")["quantity"] == 27

    def test_whole_float_delta_accepted(self, store):
        _rice(store)
        assert LedgerService.apply_quantity_change(store, "Rice", 4.0)["quantity"] == 14

    def test_unknown_product(self, store):
        with pytest.raises(NotFound):
            LedgerService.apply_quantity_change(store, "Ghost", 1)

    @pytest.mark.parametrize("delta", [None, "5", "abc", True, 2.5, [1]])
    def test_invalid_delta(self, store, delta):
        _rice(store)
        with pytest.raises(InvalidInputError):
            LedgerService.apply_quantity_change(store, "Rice", delta)
        assert LedgerService.get_product(store, "Rice")["quantity"] == 10


class TestImport:

    def test_inserts_new_and_increments_existing(self, store):
        _rice(store, costPrice=2.0)
        result = LedgerService.import_products(store, [
            {"name": "Rice", "quantity": 5, "supplier": "Acme"},
            {"name": "Beans", "quantity": 3},
        ])
        assert result == {"created": 1, "updated": 1}

        rice = LedgerService.get_product(store, "Rice")
        assert rice["quantity"] == 15
        assert rice["supplier"] == "Acme"
        assert rice["costPrice"] == 2.0
        assert LedgerService.get_product(store, "Beans")["quantity"] == 3

    def test_accepts_wrapped_list(self, store):
        result = LedgerService.import_products(store, {"products": [{"name": "Oil", "quantity": 1}]})
        assert result == {"created": 1, "updated": 0}

    def test_invalid_item_writes_nothing(self, store):
        with pytest.raises(ValidationError):
            LedgerService.import_products(store, [{"name": "Oil"}, {"quantity": 2}])
        assert store.count(EntityKind.PRODUCT) == 0

    def test_rejects_non_list(self, store):
        with pytest.raises(ValidationError):
            LedgerService.import_products(store, "Rice")


class TestStockHistory:

    def test_empty_history(self, store):
        _rice(store)
        assert LedgerService.product_stock_history(store, "Rice") == []
        assert store.count(EntityKind.RECORD) == 0
        assert LedgerService.get_product(store, "Rice")["quantity"] == 10

    def test_running_total_ordered_by_date(self, store):
        RecordService.create_record(store, "incoming", {"name": "Rice", "quantity": 10, "date": "2024-01-03"})
        RecordService.create_record(store, "outgoing", {"name": "Rice", "quantity": 4, "date": "2024-01-05"})
        RecordService.create_record(store, "incoming", {"name": "Rice", "quantity": 6, "date": "2024-01-01"})
        RecordService.create_record(store, "outgoing", {"name": "Rice", "quantity": 2, "date": "2024-01-03"})
        RecordService.create_record(store, "incoming", {"name": "Beans", "quantity": 100, "date": "2024-01-02"})

        history = LedgerService.product_stock_history(store, "Rice")

        assert history == [
            {"date": "2024-01-01", "type": "incoming", "quantity": 6, "total": 6},
            {"date": "2024-01-03", "type": "incoming", "quantity": 10, "total": 16},
            {"date": "2024-01-03", "type": "outgoing", "quantity": 2, "total": 14},
            {"date": "2024-01-05", "type": "outgoing", "quantity": 4, "total": 10},
        ]

    def test_history_may_disagree_with_stored_quantity(self, store):
        _rice(store, quantity=50)
        RecordService.create_record(store, "incoming", {"name": "Rice", "quantity": 5, "date": "2024-02-01"})
        history = LedgerService.product_stock_history(store, "Rice")
        assert history[-1]["total"] == 5
        assert LedgerService.get_product(store, "Rice")["quantity"] == 50

    def test_history_without_product(self, store):
        RecordService.create_record(store, "outgoing", {"name": "Ghost", "quantity": 1, "date": "2024-01-01"})
        assert LedgerService.product_stock_history(store, "Ghost")[0]["total"] == -1


class TestRestockFrequency:

    def test_added_is_relative_to_previous_restock(self, store):
        _rice(store, quantity=5)
        RecordService.create_record(store, "incoming", {"name": "Rice", "quantity": 10, "date": "2024-01-01"})
        RecordService.create_record(store, "incoming", {"name": "Rice", "quantity": 4, "date": "2024-01-10"})
        RecordService.create_record(store, "incoming", {"name": "Rice", "quantity": 8, "date": "2024-01-05"})
        RecordService.create_record(store, "outgoing", {"name": "Rice", "quantity": 3, "date": "2024-01-06"})

        result = LedgerService.restock_frequency(store, "Rice")

        assert result["frequency"] == 3
        assert result["history"] == [
            {"date": "2024-01-01", "added": 5, "cumulative": 5},
            {"date": "2024-01-05", "added": -2, "cumulative": 3},
            {"date": "2024-01-10", "added": -4, "cumulative": -1},
        ]

    def test_no_restocks(self, store):
        _rice(store)
        assert LedgerService.restock_frequency(store, "Rice") == {"name": "Rice", "frequency": 0, "history": []}

    def test_unknown_product(self, store):
        with pytest.raises(NotFound):
            LedgerService.restock_frequency(store, "Ghost")

    def test_compute_without_store(self):
        history = LedgerService.compute_restock_frequency([{"date": "2024-03-01", "quantity": 7}], 0)
        assert history == [{"date": "2024-03-01", "added": 7, "cumulative": 7}]


class TestRecords:

    def test_path_type_overrides_body(self, store):
        record = RecordService.create_record(store, "incoming", {"type": "outgoing", "name": "Rice", "quantity": 3})
        assert record["type"] == "incoming"

    def test_date_defaults_to_today(self, store):
        record = RecordService.create_record(store, "outgoing", {"name": "Rice", "quantity": 1})
        assert record["date"] == date.today().isoformat()

    def test_unknown_type(self, store):
        with pytest.raises(ValidationError):
            RecordService.create_record(store, "sideways", {"name": "Rice", "quantity": 1})

    def test_quantity_required(self, store):
        with pytest.raises(ValidationError):
            RecordService.create_record(store, "incoming", {"name": "Rice"})

    def test_partial_update_keeps_type_and_other_fields(self, store):
        record = RecordService.create_record(
            store, "outgoing", {"name": "Rice", "quantity": 2, "cost": 10, "date": "2024-01-01"}
        )
        updated = RecordService.update_record(store, record["id"], {"cost": 12, "type": "incoming"})
        assert updated["cost"] == 12
        assert updated["type"] == "outgoing"
        assert updated["name"] == "Rice"
        assert updated["date"] == "2024-01-01"

    @pytest.mark.parametrize("patch", [{"quantity": None}, {"name": None}])
    def test_update_rejects_null_required_fields(self, store, patch):
        record = RecordService.create_record(store, "outgoing", {"name": "Rice", "quantity": 2})
        with pytest.raises(ValidationError):
            RecordService.update_record(store, record["id"], patch)
        stored = RecordService.get_record(store, record["id"])
        assert stored["name"] == "Rice"
        assert stored["quantity"] == 2

    def test_update_missing_record(self, store):
        with pytest.raises(NotFound):
            RecordService.update_record(store, "missing", {"cost": 1})

    def test_delete_missing_record(self, store):
        with pytest.raises(NotFound):
            RecordService.delete_record(store, "missing")

    def test_export_splits_by_type(self, store):
        RecordService.create_record(store, "incoming", {"name": "Rice", "quantity": 3})
        RecordService.create_record(store, "outgoing", {"name": "Rice", "quantity": 1})
        export = RecordService.export_records(store, today=date(2024, 5, 17))
        assert export["filename"] == "records-2024-05-17.json"
        assert len(export["content"]["incomingRecords"]) == 1
        assert len(export["content"]["outgoingRecords"]) == 1
