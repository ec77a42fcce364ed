"""
Tests for the medicine repository: reads, domain queries and CRUD.
"""

from datetime import timedelta

from crud import medicine as crud_medicine
from models.audit_mixin import utcnow
from models.medicine import Medicine
from schemas.medicine import MedicineCreate, MedicineUpdate


def _set(db, medicine, **values):
    for key, value in values.items():
        setattr(medicine, key, value)
    db.commit()
    db.refresh(medicine)
    return medicine


class TestCreateAndGet:
    """Round trip through create_medicine and get_medicine."""

    def test_create_then_get_adds_server_defaults(self, db):
        """A created medicine reads back as the input plus usage defaults and timestamps."""
        payload = MedicineCreate(
            name="Ibuprofen",
            category_id="3",
            category_name="Pain Relief",
            purpose="Inflammation",
            usage_notes="Take with food",
            dosage="200mg",
            quantity=12,
            default_quantity=20,
            symptoms=["Body Pain", "Fever"],
        )
        created = crud_medicine.create_medicine(db, payload)
        fetched = crud_medicine.get_medicine(db, created.id)

        assert fetched is not None
        for key, value in payload.model_dump().items():
            assert getattr(fetched, key) == value
        assert fetched.usage_count == 0
        assert fetched.last_used is None
        assert fetched.is_quick_access is False
        assert fetched.created_at is not None
        assert fetched.updated_at is not None

    def test_default_quantity_defaults_to_ten(self, db):
        """default_quantity falls back to 10 when the caller leaves it out."""
        created = crud_medicine.create_medicine(
            db,
            MedicineCreate(name="Cetirizine", category_id="2", category_name="Allergy", dosage="10mg", quantity=5),
        )
        assert created.default_quantity == 10
        assert created.symptoms == []

    def test_get_accepts_string_ids(self, db, make_medicine):
        """Ids coming from URLs are strings."""
        created = make_medicine()
        assert crud_medicine.get_medicine(db, str(created.id)).id == created.id

    def test_get_unknown_id_returns_none(self, db):
        """Unknown ids fail soft."""
        assert crud_medicine.get_medicine(db, 999) is None

    def test_get_malformed_id_returns_none(self, db, make_medicine):
        """Malformed ids behave exactly like unknown ids."""
        make_medicine()
        assert crud_medicine.get_medicine(db, "not-an-id") is None
        assert crud_medicine.get_medicine(db, "65a1f0c2e4b0a1b2c3d4e5f6") is None
        assert crud_medicine.get_medicine(db, "-1") is None
        assert crud_medicine.get_medicine(db, None) is None

    def test_duplicate_symptoms_are_collapsed(self, db, make_medicine):
        """Symptoms behave as a set but keep their first-seen order."""
        created = make_medicine(symptoms=["Fever", "Headache", "Fever", " "])
        assert created.symptoms == ["Fever", "Headache"]


class TestListing:
    """get_all_medicines ordering."""

    def test_ordered_by_name(self, db, make_medicine):
        """Medicines come back alphabetically."""
        make_medicine(name="Zinc")
        make_medicine(name="Aspirin")
        make_medicine(name="Melatonin")
        names = [m.name for m in crud_medicine.get_all_medicines(db)]
        assert names == ["Aspirin", "Melatonin", "Zinc"]

    def test_empty(self, db):
        """No medicines, empty list."""
        assert crud_medicine.get_all_medicines(db) == []


class TestLowStock:
    """get_low_stock_medicines threshold and ordering."""

    def test_exactly_quantity_at_or_below_three(self, db, make_medicine):
        """Only quantities 0..3 are low; 4 is not."""
        for name, quantity in [("A", 0), ("B", 1), ("C", 3), ("D", 4), ("E", 10)]:
            make_medicine(name=name, quantity=quantity)
        low = crud_medicine.get_low_stock_medicines(db)
        assert {m.name for m in low} == {"A", "B", "C"}
        assert all(m.quantity <= 3 for m in low)

    def test_sorted_by_quantity_then_name(self, db, make_medicine):
        """Lowest quantity first, ties broken by name."""
        make_medicine(name="Zyrtec", quantity=1)
        make_medicine(name="Advil", quantity=2)
        make_medicine(name="Benadryl", quantity=1)
        make_medicine(name="Tylenol", quantity=0)
        low = crud_medicine.get_low_stock_medicines(db)
        assert [(m.name, m.quantity) for m in low] == [
            ("Tylenol", 0),
            ("Benadryl", 1),
            ("Zyrtec", 1),
            ("Advil", 2),
        ]


class TestSymptomSearch:
    """search_medicines_by_symptoms matching and ranking."""

    def test_in_stock_single_match_beats_out_of_stock_double_match(self, db, make_medicine):
        """Out of stock always sorts last, however many symptoms it matches."""
        make_medicine(name="Empty", quantity=0, symptoms=["Fever", "Headache"])
        make_medicine(name="Stocked", quantity=5, symptoms=["Fever"])

        results = crud_medicine.search_medicines_by_symptoms(db, ["Fever", "Headache"])
        assert [m.name for m in results] == ["Stocked", "Empty"]

        results = crud_medicine.search_medicines_by_symptoms(db, ["Fever"])
        assert [m.name for m in results] == ["Stocked", "Empty"]

    def test_more_matches_rank_higher(self, db, make_medicine):
        """Among in-stock medicines, match count decides first."""
        make_medicine(name="One", symptoms=["Fever"])
        make_medicine(name="Two", symptoms=["Fever", "Headache"])
        results = crud_medicine.search_medicines_by_symptoms(db, ["Fever", "Headache"])
        assert [m.name for m in results] == ["Two", "One"]

    def test_usage_count_breaks_ties(self, db, make_medicine):
        """Same match count: the more used medicine first."""
        rarely = make_medicine(name="Rarely", symptoms=["Nausea"])
        often = make_medicine(name="Often", symptoms=["Nausea"])
        _set(db, rarely, usage_count=1)
        _set(db, often, usage_count=7)
        results = crud_medicine.search_medicines_by_symptoms(db, ["Nausea"])
        assert [m.name for m in results] == ["Often", "Rarely"]

    def test_non_matching_medicines_excluded(self, db, make_medicine):
        """Only medicines sharing a symptom are returned."""
        make_medicine(name="Sleepy", symptoms=["Sleep Aid"])
        make_medicine(name="Feverish", symptoms=["Fever"])
        results = crud_medicine.search_medicines_by_symptoms(db, ["Fever"])
        assert [m.name for m in results] == ["Feverish"]

    def test_empty_input(self, db, make_medicine):
        """No symptoms, no results."""
        make_medicine()
        assert crud_medicine.search_medicines_by_symptoms(db, []) == []


class TestQuickAccess:
    """get_quick_access_medicines criteria, ordering and cap."""

    def test_qualifying_criteria(self, db, make_medicine):
        """Recent use, frequent use, or the flag each qualify on their own."""
        recent = make_medicine(name="Recent")
        frequent = make_medicine(name="Frequent")
        flagged = make_medicine(name="Flagged")
        stale = make_medicine(name="Stale")
        make_medicine(name="Never")

        _set(db, recent, last_used=utcnow() - timedelta(days=2))
        _set(db, frequent, usage_count=5)
        _set(db, flagged, is_quick_access=True)
        _set(db, stale, last_used=utcnow() - timedelta(days=30), usage_count=4)

        names = {m.name for m in crud_medicine.get_quick_access_medicines(db)}
        assert names == {"Recent", "Frequent", "Flagged"}

    def test_ordered_by_last_used_then_usage_count(self, db, make_medicine):
        """Newest use first; never-used medicines follow, most used first."""
        older = make_medicine(name="Older")
        newer = make_medicine(name="Newer")
        busy = make_medicine(name="Busy")
        quiet = make_medicine(name="Quiet")

        _set(db, older, last_used=utcnow() - timedelta(days=3), is_quick_access=True)
        _set(db, newer, last_used=utcnow() - timedelta(hours=1), is_quick_access=True)
        _set(db, busy, usage_count=9)
        _set(db, quiet, usage_count=6)

        names = [m.name for m in crud_medicine.get_quick_access_medicines(db)]
        assert names == ["Newer", "Older", "Busy", "Quiet"]

    def test_capped_at_eight(self, db, make_medicine):
        """At most eight medicines are returned."""
        for i in range(10):
            medicine = make_medicine(name=f"Med {i}")
            _set(db, medicine, is_quick_access=True, usage_count=i)
        assert len(crud_medicine.get_quick_access_medicines(db)) == 8


class TestUpdateAndDelete:
    """update_medicine merges; delete_medicine removes."""

    def test_update_merges_provided_fields(self, db, make_medicine):
        """Unsent fields keep their values and updated_at moves."""
        created = make_medicine(name="Old Name", dosage="1 tablet", quantity=8)
        before = created.updated_at

        updated = crud_medicine.update_medicine(db, created.id, MedicineUpdate(name="New Name", quantity=2))

        assert updated.name == "New Name"
        assert updated.quantity == 2
        assert updated.dosage == "1 tablet"
        assert updated.updated_at >= before

    def test_update_missing_returns_none(self, db):
        """Unknown ids are not found."""
        assert crud_medicine.update_medicine(db, 42, MedicineUpdate(name="X")) is None
        assert crud_medicine.update_medicine(db, "abc", MedicineUpdate(name="X")) is None

    def test_delete(self, db, make_medicine):
        """Hard delete removes the row and reports it."""
        created = make_medicine()
        assert crud_medicine.delete_medicine(db, created.id) is True
        assert db.query(Medicine).count() == 0
        assert crud_medicine.delete_medicine(db, created.id) is False

    def test_delete_malformed_id(self, db):
        """Malformed ids delete nothing."""
        assert crud_medicine.delete_medicine(db, "oops") is False
