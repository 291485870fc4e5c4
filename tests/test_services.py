from ceres_bridge.accessories.services import (
    REQUIRED_SERVICES, Capability, PresentationService, services_for,
)

T = Capability.TEMPERATURE
H = Capability.HUMIDITY
A = Capability.AC


def test_table_covers_every_combination():
    combos = {Capability(value) for value in range(8)}
    assert set(REQUIRED_SERVICES) == combos


def test_heater_cooler_requires_temperature():
    assert PresentationService.HEATER_COOLER not in services_for(A)
    assert PresentationService.HEATER_COOLER not in services_for(H | A)
    assert services_for(T | A) == {
        PresentationService.TEMPERATURE_SENSOR,
        PresentationService.HEATER_COOLER,
    }


def test_all_capabilities():
    assert services_for(T | H | A) == set(PresentationService)
    assert services_for(Capability.NONE) == frozenset()
