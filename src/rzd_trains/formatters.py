"""Output formatters for console display."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .core.models import (
    ResultList,
    RouteDetail,
    RouteList,
    StationList,
    TrainInfoList,
    format_clock,
    format_duration,
)

console = Console()


def _or_dash(value: object) -> str:
    return "-" if value is None or value == "" else str(value)


def format_route_table(routes: RouteList | None) -> None:
    """Display a train schedule as a rich table."""
    if not routes:
        console.print("Поездов не найдено.")
        return

    table = Table(title="Расписание поездов", show_header=True, header_style="bold magenta")
    table.add_column("Поезд", style="cyan", no_wrap=True)
    table.add_column("Маршрут", style="dim")
    table.add_column("Отправление", style="green")
    table.add_column("Прибытие", style="green")
    table.add_column("В пути", style="yellow")
    table.add_column("Места", style="blue")

    for route in routes:
        train = route.train_number
        if route.brand:
            train += f" {route.brand}"

        path = "-"
        if route.route_from and route.route_to:
            path = f"{route.route_from} → {route.route_to}"

        departure = (
            f"{route.departure_station}\n"
            f"{route.departure_date} {format_clock(route.departure_time)}"
        )
        arrival = (
            f"{route.arrival_station}\n"
            f"{_or_dash(route.arrival_date)} {format_clock(route.arrival_time)}"
        )

        seats = "\n".join(str(seat) for seat in route.seats) or _or_dash(route.stops)
        table.add_row(train, path, departure, arrival, format_duration(route.duration), seats)

    console.print(table)


def format_train_info(trains: TrainInfoList | None, verbose: bool = False) -> None:
    """Display cars, prices and free seats of a train."""
    if not trains:
        console.print("Мест не найдено.")
        return

    for train in trains:
        summary_text = f"""[bold]Поезд:[/bold] {train.train_number}
[bold]Отправление:[/bold] {train.departure_station} {_or_dash(train.departure_date)} {format_clock(train.departure_time)}
[bold]Прибытие:[/bold] {train.arrival_station} {_or_dash(train.arrival_date)} {format_clock(train.arrival_time)}"""
        console.print(Panel(summary_text, title="Поезд", border_style="blue"))

        table = Table(show_header=True, header_style="bold blue")
        table.add_column("Вагон", style="cyan", no_wrap=True)
        table.add_column("Тип", style="green")
        table.add_column("Класс", style="yellow")
        table.add_column("Тариф", style="magenta")
        table.add_column("Места", style="blue")
        if verbose:
            table.add_column("Номера мест", style="dim")
            table.add_column("Услуги", style="dim")

        for car in train.cars:
            row = [
                car.number,
                _or_dash(car.car_type),
                _or_dash(car.service_class),
                _or_dash(car.tariff),
                "\n".join(str(seats) for seats in car.seats) or "-",
            ]
            if verbose:
                row.append(_or_dash(car.places))
                row.append(", ".join(car.services) or "-")
            table.add_row(*row)

        console.print(table)


def format_route_detail(route: RouteDetail | None) -> None:
    """Display the stops of a train."""
    if not route:
        console.print("Остановок не найдено.")
        return

    table = Table(
        title=f"Остановки поезда № {route.train_number or '?'}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Станция", style="cyan")
    table.add_column("Код", style="dim")
    table.add_column("Прибытие", style="green")
    table.add_column("Стоянка", style="yellow")
    table.add_column("Отправление", style="green")
    table.add_column("Км", style="blue", justify="right")

    for stop in route:
        table.add_row(
            stop.station,
            _or_dash(stop.code),
            format_clock(stop.arrival_time),
            format_duration(stop.stop_duration),
            format_clock(stop.departure_time),
            _or_dash(stop.distance),
        )

    console.print(table)


def format_station_table(stations: StationList | None) -> None:
    """Display station codes as a rich table."""
    if not stations:
        console.print("Станций не найдено.")
        return

    table = Table(title="Коды станций", show_header=True, header_style="bold magenta")
    table.add_column("Код", style="cyan", no_wrap=True)
    table.add_column("Станция", style="green")

    for station in stations:
        table.add_row(str(station.code), station.name)

    console.print(table)


def format_json(results: ResultList | None) -> str:
    """Format search results as JSON."""
    if results is None:
        return "[]"
    return results.to_json(indent=2)
