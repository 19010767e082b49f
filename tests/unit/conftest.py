import pytest
from isochem import ChemicalCompound, SimpleAddition, SimpleSubtraction


@pytest.fixture
def glucose():
    return ChemicalCompound("Glucose", "C6H12O6", compound_class="carbohydrate")


@pytest.fixture
def methane():
    return ChemicalCompound("Methane", "CH4")


@pytest.fixture
def protonation():
    return SimpleAddition("H")


@pytest.fixture
def water_loss():
    return SimpleSubtraction("H2O")
