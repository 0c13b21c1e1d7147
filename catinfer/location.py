Location = tuple[int, int]


def format_location(location: Location) -> str:
    return f'line {location[0]}, column {location[1] + 1}'
