# dags/weather_temp_dag.py
from __future__ import annotations
from datetime import datetime, timedelta
from typing import List
from airflow.decorators import dag, task
from airflow.exceptions import AirflowFailException
from multiweather.config import build_aggregator, load_settings

CITIES: List[str] = ["Chisinau", "London", "Salt Lake City"]

@dag(
    dag_id="weather_temp",
    start_date=datetime(2025, 1, 1),
    schedule="0 6 * * *",
    catchup=False,
    default_args={"owner": "multi-weather", "retries": 1, "retry_delay": timedelta(minutes=2)},
    tags=["weather", "temperature"],
)
def weather_temp():
    @task(pool="weather_providers", execution_timeout=timedelta(seconds=30))
    def fetch_temp(city: str) -> dict:
        # keys come from the task environment, same variables the cli and server read
        aggregator = build_aggregator(load_settings())
        if not len(aggregator):
            raise AirflowFailException("no weather provider API keys in task environment")

        try:
            report = aggregator.report(city)
        except Exception as e:
            raise AirflowFailException(f"fetch_temp({city}) failed: {e}")

        return {"city": city, "temp": round(report.temp, 2), "took": report.took_str()}

    results = fetch_temp.expand(city=CITIES)

    @task
    def publish(rows: List[dict]) -> None:
        by = {r["city"]: r for r in rows}
        for city in CITIES:
            r = by[city]
            print(f"{city} Temperature: {r['temp']:.2f} (took {r['took']})")

    publish(results)

dag = weather_temp()
