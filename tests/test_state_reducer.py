"""Tests for the state reducers."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.campus import CampusData, ClassData
from models.hostel import HostelData
from models.patch import CampusPatch, ClassPatch, CustomFeePatch, HostelPatch, SettingsPatch
from models.settings import CustomFee, GlobalSettings
from models.state import SimulationState
from engine.state_reducer import (
    add_class, add_custom_fee, apply_campus_patch, apply_class_patch, apply_custom_fee_patch,
    apply_global_discount, apply_hostel_patch, apply_patch, apply_settings_patch, remove_custom_fee,
    reset_state, validate_patch,
)


def make_state():
    return SimulationState(
        campuses=[
            CampusData("A", "Campus A", "A", 200, discount_rate=10, classes=[
                ClassData("Grade 1", 40, 180000, 20, 200000),
                ClassData("Grade 2", 45, 190000, 5, 210000, forecast_renewal_count=50,
                          forecast_new_admission_count=8),
            ]),
            CampusData("B", "Campus B", "B", 100, discount_rate=15),
        ],
        hostels=[HostelData("H1", "Hostel", 30, 40, 150000)],
        settings=GlobalSettings(custom_fees=[CustomFee("f1", "Sports", 5000)]),
    )


class TestValidatePatch:
    def test_valid_patch(self):
        assert validate_patch(CampusPatch(discount_rate=12.5, name="New Name")) == []

    def test_string_for_number(self):
        errors = validate_patch(CampusPatch(discount_rate="ten"))
        assert len(errors) == 1
        assert "discount_rate" in errors[0]

    def test_bool_is_not_a_number(self):
        assert validate_patch(HostelPatch(fee_per_student=True))

    def test_fractional_count(self):
        assert validate_patch(ClassPatch(renewal_count=10.5))
        assert validate_patch(ClassPatch(renewal_count=10.0)) == []

    def test_flag_must_be_bool(self):
        assert validate_patch(CampusPatch(annual_fee_applicable="yes"))

    def test_blank_name(self):
        assert validate_patch(CustomFeePatch(name="  "))

    def test_unknown_patch_type(self):
        assert validate_patch({"discount_rate": 5})

    def test_negative_values_are_accepted(self):
        assert validate_patch(CampusPatch(max_capacity=-10, discount_rate=-5)) == []


class TestCampusAndClassPatches:
    def test_campus_patch_returns_new_state(self):
        state = make_state()
        new_state = apply_campus_patch(state, "A", CampusPatch(discount_rate=20, max_capacity=300))

        assert new_state.find_campus("A").discount_rate == 20
        assert new_state.find_campus("A").max_capacity == 300
        assert state.find_campus("A").discount_rate == 10
        assert new_state.find_campus("B") is state.find_campus("B")

    def test_count_coerced_to_int(self):
        new_state = apply_campus_patch(make_state(), "A", CampusPatch(max_capacity=250.0))
        assert isinstance(new_state.find_campus("A").max_capacity, int)

    def test_unknown_campus(self):
        with pytest.raises(ValueError, match="Unknown campus"):
            apply_campus_patch(make_state(), "Z", CampusPatch(discount_rate=5))

    def test_invalid_patch_rejected(self):
        with pytest.raises(ValueError):
            apply_campus_patch(make_state(), "A", CampusPatch(discount_rate="high"))

    def test_wrong_patch_type(self):
        with pytest.raises(ValueError, match="Expected CampusPatch"):
            apply_campus_patch(make_state(), "A", HostelPatch(fee_per_student=1))

    def test_class_patch(self):
        new_state = apply_class_patch(make_state(), "A", 0, ClassPatch(renewal_count=42))
        classes = new_state.find_campus("A").classes
        assert classes[0].renewal_count == 42
        assert classes[1].renewal_count == 45

    def test_class_index_out_of_range(self):
        with pytest.raises(ValueError, match="out of range"):
            apply_class_patch(make_state(), "A", 5, ClassPatch(renewal_count=1))

    def test_clear_forecast_overrides(self):
        new_state = apply_class_patch(make_state(), "A", 1, ClassPatch(clear_forecast_overrides=True))
        cls = new_state.find_campus("A").classes[1]
        assert cls.forecast_renewal_count is None
        assert cls.forecast_new_admission_count is None

    def test_clear_then_set_one_override(self):
        patch = ClassPatch(clear_forecast_overrides=True, forecast_new_admission_count=12)
        cls = apply_class_patch(make_state(), "A", 1, patch).find_campus("A").classes[1]
        assert cls.forecast_renewal_count is None
        assert cls.forecast_new_admission_count == 12

    def test_add_class(self):
        new_state = add_class(make_state(), "B", ClassData("Grade 9", 10, 250000, 2, 260000))
        assert [c.class_name for c in new_state.find_campus("B").classes] == ["Grade 9"]


class TestGlobalDiscount:
    def test_sets_every_campus(self):
        new_state = apply_global_discount(make_state(), 18)
        assert [c.discount_rate for c in new_state.campuses] == [18, 18]
        assert new_state.settings.global_discount == 18

    def test_rejects_non_number(self):
        with pytest.raises(ValueError):
            apply_global_discount(make_state(), "18")


class TestHostelAndSettings:
    def test_hostel_patch(self):
        new_state = apply_hostel_patch(make_state(), "H1", HostelPatch(current_occupancy=35))
        assert new_state.find_hostel("H1").current_occupancy == 35

    def test_unknown_hostel(self):
        with pytest.raises(ValueError, match="Unknown hostel"):
            apply_hostel_patch(make_state(), "H9", HostelPatch(current_occupancy=1))

    def test_settings_patch(self):
        new_state = apply_settings_patch(make_state(), SettingsPatch(fee_hike=7, school_dcp=12000))
        assert new_state.settings.fee_hike == 7
        assert new_state.settings.school_dcp == 12000
        assert new_state.settings.custom_fees == make_state().settings.custom_fees


class TestCustomFees:
    def test_add(self):
        new_state = add_custom_fee(make_state(), "Lab", 3000, applies_to_hostel=True, fee_id="lab")
        fee = new_state.settings.custom_fees[-1]
        assert (fee.fee_id, fee.name, fee.amount, fee.applies_to_hostel) == ("lab", "Lab", 3000, True)

    def test_add_generates_id(self):
        new_state = add_custom_fee(make_state(), "Lab", 3000)
        assert new_state.settings.custom_fees[-1].fee_id

    def test_add_duplicate_id(self):
        with pytest.raises(ValueError, match="already exists"):
            add_custom_fee(make_state(), "Sports 2", 100, fee_id="f1")

    def test_add_rejects_blank_name(self):
        with pytest.raises(ValueError):
            add_custom_fee(make_state(), "", 100)

    def test_patch(self):
        new_state = apply_custom_fee_patch(make_state(), "f1", CustomFeePatch(amount=6000))
        assert new_state.settings.custom_fees[0].amount == 6000

    def test_remove(self):
        new_state = remove_custom_fee(make_state(), "f1")
        assert new_state.settings.custom_fees == []

    def test_remove_unknown(self):
        with pytest.raises(ValueError, match="Unknown custom fee"):
            remove_custom_fee(make_state(), "nope")


class TestApplyPatch:
    def test_routes_by_type(self):
        state = make_state()
        assert apply_patch(state, SettingsPatch(fee_hike=3)).settings.fee_hike == 3
        assert apply_patch(state, CampusPatch(discount_rate=1), "B").find_campus("B").discount_rate == 1
        assert apply_patch(state, ClassPatch(new_admission_count=9), "A", 0) \
            .find_campus("A").classes[0].new_admission_count == 9
        assert apply_patch(state, HostelPatch(max_capacity=60), "H1").find_hostel("H1").max_capacity == 60

    def test_missing_target(self):
        with pytest.raises(ValueError, match="target id"):
            apply_patch(make_state(), CampusPatch(discount_rate=1))

    def test_class_patch_needs_index(self):
        with pytest.raises(ValueError, match="class index"):
            apply_patch(make_state(), ClassPatch(renewal_count=1), "A")

    def test_unsupported_patch(self):
        with pytest.raises(ValueError, match="Unsupported"):
            apply_patch(make_state(), {"fee_hike": 1}, "A")


class TestResetState:
    def test_returns_normalized_defaults(self):
        state = reset_state(make_state())
        assert state.find_campus("A").last_year_discount == 10
        assert state.find_hostel("H1").last_year_fee_per_student == 150000


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
