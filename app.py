from colorama import Fore, Style

from bikeflow.config import ViewerConfig
from bikeflow.controller import TrafficController
from bikeflow.index.minute_buckets import MinuteBucketIndex
from bikeflow.trips.ingest import load_trips_csv
from bikeflow.util.stations import load_stations
from bikeflow.viz.app.single import serve_traffic_map


def build_controller(config: ViewerConfig) -> TrafficController:
  stations = load_stations(config.stations_json)

  try:
    index = load_trips_csv(config.trips_csv).index
  except (OSError, ValueError) as e:
    # keep serving an empty map rather than dying at startup
    print(f"{Fore.RED}Error loading trips from {config.trips_csv}: {e}{Style.RESET_ALL}")
    index = MinuteBucketIndex()
    index.freeze()

  return TrafficController(
      stations,
      index,
      radius_minutes=config.window_minutes,
  )


def main():
  config = ViewerConfig.from_env()
  controller = build_controller(config)

  serve_traffic_map(
      controller=controller,
      host=config.host,
      port=config.port,
      debug=config.debug,
      title="Bike Share Traffic",
      bike_lanes=config.bike_lanes,
  )


if __name__ == "__main__":
  main()
