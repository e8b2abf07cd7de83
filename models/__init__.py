from models.campus import CampusData, ClassData
from models.hostel import HostelData
from models.settings import CustomFee, GlobalSettings
from models.state import SavedScenario, SimulationState
from models.patch import ClassPatch, CampusPatch, CustomFeePatch, HostelPatch, SettingsPatch
from models.calculation import (
    AdditionalFees, CampusCalculation, CampusFeeBreakdown, CampusRates, ClassCalculation,
    CustomFeeTotal, FeeLine, HostelCalculation, PopulationProjection, SimulationResult,
    TotalCalculation,
)
