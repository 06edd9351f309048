import logging

from itinerary_planner import plan_trip, build_structured_output, export_json, export_csv


def demo():
    logging.basicConfig(level=logging.INFO)
    planner = plan_trip("Kyoto", 3, "kuil dan kuliner", "10.000.000 IDR")
    state = planner.state
    if state.error:
        print(state.error)
        return

    result = build_structured_output(state.itinerary, state.summary, planner.tracker().warnings())
    print("==== Itinerary ====")
    for day in result["days"]:
        print(f"Hari {day['day']}: {day['theme']}")
        for a in day["activities"]:
            print(f"  - {a['time']}  {a['name']}  ({a['cost_display']})")
    print("\n==== Ringkasan Anggaran ====")
    for k, v in result["summary"].items():
        print(f"{k}: {v}")

    export_json(state.itinerary, state.summary, "output_itinerary.json")
    export_csv(state.itinerary, state.summary, "output_itinerary.csv")
    print("\nDiekspor: output_itinerary.json, output_itinerary.csv")


if __name__ == "__main__":
    demo()
