# value objects and tiny numeric helpers shared by providers, service and front end

from dataclasses import dataclass

KELVIN_OFFSET = 273.15

@dataclass(frozen=True)
class CityTemperature:
    # output value object used by the http front end, cli and dag
    city: str
    temp: float
    took: float  # seconds spent in the aggregation call

    def took_str(self) -> str:
        return f"{self.took:.3f}s"

def kelvin_to_celsius(kelvin: float) -> float:
    return kelvin - KELVIN_OFFSET
