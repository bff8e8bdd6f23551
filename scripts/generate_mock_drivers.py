import csv
import random

from zones.catalog import DEFAULT_MAP_CENTER


def generate_mock_drivers(filename="mock_drivers_100.csv", count=100, seed=None):
    rng = random.Random(seed)

    # Scatter around the Acarigua-Araure midpoint.
    base_lat = DEFAULT_MAP_CENTER["lat"]
    base_lng = DEFAULT_MAP_CENTER["lng"]

    with open(filename, mode='w', newline='') as file:
        writer = csv.writer(file)
        writer.writerow(["driver_id", "lat", "lng", "rating", "acceptance_rate", "status"])

        for i in range(count):
            driver_id = f"DRV-{str(i+1).zfill(3)}"

            # Roughly +/- 4km around the center
            lat = base_lat + (rng.random() - 0.5) * 0.07
            lng = base_lng + (rng.random() - 0.5) * 0.07

            # 10% of drivers have no GPS fix yet, the engine must skip them
            if rng.random() < 0.1:
                lat_cell, lng_cell = "", ""
            else:
                lat_cell, lng_cell = round(lat, 6), round(lng, 6)

            # New drivers come without a rating history
            rating = "" if rng.random() < 0.15 else round(rng.uniform(3.5, 5.0), 2)
            acceptance = round(rng.uniform(0.6, 1.0), 2)

            status = "available" if rng.random() < 0.85 else "offline"

            writer.writerow([driver_id, lat_cell, lng_cell, rating, acceptance, status])

    print(f"Successfully generated {count} mock drivers into '{filename}'.")


if __name__ == "__main__":
    generate_mock_drivers()
