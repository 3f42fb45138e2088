from dataclasses import dataclass


@dataclass
class ForecastRecord:
    """One forecast period of the 36-hour dataset. Every field is a display string."""

    start_time: str = ""
    end_time: str = ""
    weather: str = ""
    rain: str = ""
    min_temp: str = ""
    max_temp: str = ""
    comfort: str = ""
    wind_speed: str = ""

    def to_dict(self):
        return {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "weather": self.weather,
            "rain": self.rain,
            "minTemp": self.min_temp,
            "maxTemp": self.max_temp,
            "comfort": self.comfort,
            "windSpeed": self.wind_speed,
        }


@dataclass
class HazardRecord:
    phenomena: str = ""
    start_time: str = ""
    end_time: str = ""

    def to_dict(self):
        return {
            "phenomena": self.phenomena,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }
