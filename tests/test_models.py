from models import ForecastRecord, HazardRecord

def test_forecast_record_defaults():
    r = ForecastRecord(start_time="T1", end_time="T2")
    assert r.to_dict() == {
        "startTime": "T1", "endTime": "T2", "weather": "", "rain": "",
        "minTemp": "", "maxTemp": "", "comfort": "", "windSpeed": "",
    }

def test_hazard_record_to_dict():
    r = HazardRecord(phenomena="強風", start_time="T1", end_time="T2")
    assert r.to_dict() == {"phenomena": "強風", "startTime": "T1", "endTime": "T2"}
