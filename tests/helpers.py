from datetime import timedelta


def make_event(title, start, minutes):
    return {"title": title, "start": start, "end": start + timedelta(minutes=minutes)}
