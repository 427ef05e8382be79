"""Test configuration and fixtures.

Payloads are recorded replies of pass.rzd.ru, shortened to the fields the
decoders look at plus a few they ignore.
"""

import pytest

from rzd_trains.config import RzdSettings


@pytest.fixture
def settings():
    """Settings that never sleep between polls."""
    return RzdSettings(rid_poll_interval=0, rid_poll_attempts=3, _env_file=None)


@pytest.fixture
def rid_payload():
    """First reply of a timetable layer."""
    return {"result": "RID", "RID": 17355769877, "timestamp": "02.04.2022 18:31:00.189"}


@pytest.fixture
def trip_rid_payload():
    """First reply of the train route layer."""
    return {"type": "REQUEST_ID", "rid": 17872768326, "fail_msg": "null"}


@pytest.fixture
def schedule_payload():
    """Schedule of long-distance trains from St. Petersburg to Moscow."""
    return {
        "result": "OK",
        "tp": [
            {
                "from": "САНКТ-ПЕТЕРБУРГ",
                "fromCode": 2004000,
                "where": "МОСКВА",
                "whereCode": 2000000,
                "date": "01.04.2022",
                "noSeats": False,
                "state": "Trains",
                "list": [
                    {
                        "number": "119А",
                        "brand": "",
                        "carrier": "ФПК",
                        "route0": "С-ПЕТЕР-ГЛ",
                        "route1": "БЕЛГОРОД",
                        "routeCode0": 2004001,
                        "routeCode1": 2014370,
                        "station0": "САНКТ-ПЕТЕРБУРГ-ГЛАВН. (МОСКОВСКИЙ ВОКЗАЛ)",
                        "station1": "МОСКВА ВК ВОСТОЧНЫЙ (ТПУ ЧЕРКИЗОВО)",
                        "date0": "01.04.2022",
                        "time0": "00:11",
                        "date1": "01.04.2022",
                        "time1": "10:08",
                        "timeInWay": "09:57",
                        "cars": [
                            {"type": "Плац", "typeLoc": "Плацкартный", "freeSeats": 121, "tariff": 1459, "servCls": "3Б"},
                            {"type": "Сид", "typeLoc": "Сидячий", "freeSeats": 106, "tariff": 795, "servCls": "2С"},
                            {"type": "Купе", "typeLoc": "Купе", "freeSeats": 66, "tariff": 2489, "servCls": "2К"},
                            {"type": "Купе", "typeLoc": "Купе", "freeSeats": 2, "tariff": 1362, "servCls": "2К", "disabledPerson": True},
                        ],
                    },
                    {
                        "number": "713В",
                        "brand": "СТРИЖ",
                        "carrier": "ФПК",
                        "route0": "С-ПЕТ-ЛАД",
                        "route1": "САМАРА",
                        "routeCode0": 2004006,
                        "routeCode1": 2024000,
                        "station0": "САНКТ-ПЕТЕРБУРГ (ЛАДОЖСКИЙ ВОКЗАЛ)",
                        "station1": "МОСКВА ВК ВОСТОЧНЫЙ (ТПУ ЧЕРКИЗОВО)",
                        "date0": "01.04.2022",
                        "time0": "00:20",
                        "date1": "01.04.2022",
                        "time1": "05:34",
                        "timeInWay": "05:14",
                        "cars": [
                            {"type": "Люкс", "typeLoc": "СВ", "freeSeats": 48, "tariff": 2679, "servCls": "1Е"},
                            {"type": "Сид", "typeLoc": "Сидячий", "freeSeats": 29, "tariff": 1762, "servCls": "1Р"},
                            {"type": "Купе", "typeLoc": "Купе", "freeSeats": 51, "tariff": 2269, "servCls": "2А"},
                        ],
                    },
                    {
                        "number": "725Ч",
                        "brand": "ЛАСТОЧКА",
                        "carrier": "ДОСС",
                        "route0": "С-ПЕТЕР-ГЛ",
                        "route1": "МОСКВА ОКТ",
                        "routeCode0": 2004001,
                        "routeCode1": 2006004,
                        "station0": "САНКТ-ПЕТЕРБУРГ-ГЛАВН. (МОСКОВСКИЙ ВОКЗАЛ)",
                        "station1": "МОСКВА ОКТЯБРЬСКАЯ (ЛЕНИНГРАДСКИЙ ВОКЗАЛ)",
                        "date0": "01.04.2022",
                        "time0": "15:16",
                        "date1": "01.04.2022",
                        "time1": "21:58",
                        "timeInWay": "06:42",
                        "cars": [
                            {"type": "Сид", "typeLoc": "Сидячий", "freeSeats": 319, "tariff": 1099, "servCls": "1П"},
                            {"type": "Сид", "typeLoc": "Сидячий", "freeSeats": 2, "tariff": 660, "servCls": "2Ж", "disabledPerson": True},
                        ],
                    },
                ],
                "msgList": [],
            }
        ],
        "TransferSearchMode": "SEMI_AUTO",
        "discounts": {},
        "timestamp": "20.03.2022 18:28:31.458",
    }


@pytest.fixture
def electric_schedule_payload():
    """Schedule of suburban trains from St. Petersburg to Pupyshevo."""
    return {
        "result": "OK",
        "tp": [
            {
                "from": "САНКТ-ПЕТЕРБУРГ",
                "fromCode": 2004000,
                "where": "ПУПЫШЕВО",
                "whereCode": 2005283,
                "date": "01.04.2022",
                "list": [
                    {
                        "number": "6201",
                        "brand": "",
                        "carrier": "СЗППК",
                        "route0": "САНКТ-ПЕТЕРБУРГ-ГЛАВН.",
                        "route1": "ВОЛХОВСТРОЙ 1",
                        "routeCode0": 2004001,
                        "routeCode1": 2004672,
                        "station0": "САНКТ-ПЕТЕРБУРГ-ГЛАВН. (МОСКОВСКИЙ ВОКЗАЛ)",
                        "station1": "ПУПЫШЕВО",
                        "date0": "01.04.2022",
                        "time0": "05:50",
                        "date1": "01.04.2022",
                        "time1": "07:53",
                        "timeInWay": "02:03",
                        "stList": "Везде, кроме: ОСТ.ПУНКТ 5 КМ, УСТЬ-ТОСНЕНСКАЯ, ОСТ.ПУНКТ 77 КМ",
                        "mvMode": "Ежедневно",
                        "cars": [],
                    },
                    {
                        "number": "7406",
                        "brand": "",
                        "carrier": "СЗППК",
                        "route0": "САНКТ-ПЕТЕРБУРГ ЛАДОЖ.",
                        "route1": "ТИХВИН",
                        "routeCode0": 2004006,
                        "routeCode1": 2004669,
                        "station0": "САНКТ-ПЕТЕРБУРГ (ЛАДОЖСКИЙ ВОКЗАЛ)",
                        "station1": "ПУПЫШЕВО",
                        "date0": "01.04.2022",
                        "time0": "18:51",
                        "date1": "01.04.2022",
                        "time1": "20:28",
                        "timeInWay": "01:37",
                        "stList": "МГА, ЖИХАРЕВО, ПУПЫШЕВО",
                        "mvMode": "Кроме субботы",
                        "suburbanTrainName": "Ласточка",
                        "cars": [],
                    },
                ],
                "msgList": [],
            }
        ],
        "timestamp": "20.03.2022 21:21:54.543",
    }


@pytest.fixture
def schedule_rejected_payload():
    """Schedule reply for a date outside the pre-sale period."""
    return {
        "result": "OK",
        "tp": [
            {
                "from": "САНКТ-ПЕТЕРБУРГ",
                "fromCode": 2004000,
                "where": "МОСКВА",
                "whereCode": 2000000,
                "date": "01.10.2021",
                "list": [],
                "msgList": [
                    {
                        "message": "Дата отправления находится за пределами периода предварительной продажи",
                        "addInfo": None,
                        "type": "TICKET_SEARCH_MESSAGE",
                    },
                    {
                        "message": "Дата отправления находится за пределами периода 90 дней.",
                        "addInfo": None,
                        "type": "TICKET_SEARCH_MESSAGE",
                    },
                ],
            }
        ],
        "timestamp": "02.04.2022 14:30:25.934",
    }


@pytest.fixture
def schedule_not_found_payload():
    """Schedule reply with no trains on the date."""
    return {
        "result": "OK",
        "tp": [
            {
                "from": "САНКТ-ПЕТЕРБУРГ",
                "fromCode": 2004000,
                "where": "ПУПЫШЕВО",
                "whereCode": 2005283,
                "date": "01.04.2022",
                "list": [],
                "msgList": [
                    {"message": "Поездов не найдено.", "addInfo": None, "type": "TICKET_SEARCH_MESSAGE"}
                ],
            }
        ],
    }


@pytest.fixture
def system_error_payload():
    """Reply of a timetable layer failing on the server side."""
    return {
        "result": "FAIL",
        "type": "SYSTEM_ERROR",
        "error": "Произошла системная ошибка.",
        "timestamp": "02.04.2022 14:18:02.363",
    }


@pytest.fixture
def train_info_payload():
    """Cars and free seats of train 001А."""
    return {
        "result": "OK",
        "lst": [
            {
                "result": "OK",
                "number": "001А",
                "date0": "01.04.2022",
                "time0": "23:55",
                "date1": "02.04.2022",
                "time1": "07:55",
                "type": "СК ФИРМ",
                "station0": "САНКТ-ПЕТЕРБУРГ-ГЛАВН. (МОСКОВСКИЙ ВОКЗАЛ)",
                "code0": "2004001",
                "station1": "МОСКВА ОКТЯБРЬСКАЯ (ЛЕНИНГРАДСКИЙ ВОКЗАЛ)",
                "code1": "2006004",
                "cars": [
                    {
                        "cnumber": "01",
                        "type": "Купе",
                        "typeLoc": "Купе",
                        "clsType": "2Э",
                        "services": [
                            {"id": 2, "name": "[иконка сайта] Биотуалет", "description": "Биотуалет", "hasImage": True},
                            {"id": 30, "name": "[иконка сайта] Постель", "description": "Постельное белье", "hasImage": True},
                        ],
                        "tariff": "3966",
                        "tariff2": "5090",
                        "tariffServ": "766",
                        "carrier": "ФПК",
                        "insuranceTypeId": 1,
                        "seats": [
                            {"type": "dn", "free": 9, "label": "Нижнее", "tariff": "3966"},
                            {"type": "up", "free": 15, "label": "Верхнее", "tariff": "3966"},
                        ],
                        "places": "002-004,006-010,012-014,016,020-028,030-032",
                    },
                    {
                        "cnumber": "08",
                        "type": "Люкс",
                        "typeLoc": "СВ",
                        "clsType": "1Э",
                        "services": [
                            {"id": 9, "name": "[иконка сайта] Телевизор", "description": "Телевизор", "hasImage": True},
                        ],
                        "tariff": "7950",
                        "tariff2": None,
                        "tariffServ": "1643",
                        "carrier": "ФПК",
                        "insuranceTypeId": 1,
                        "seats": [{"type": "dn", "free": 6, "label": "Нижнее", "tariff": "7950"}],
                        "places": "001,002,012,013,015,016",
                    },
                ],
            }
        ],
        "insuranceCompany": [
            {
                "id": 10,
                "shortName": "ПАО СК «Росгосстрах»",
                "offerUrl": "https://old.rgs.ru/upload/medialibrary/c96/pravila_strakhovaniya_passazhirov_215_ru_eng.pdf",
                "insuranceCost": 150,
            },
            {
                "id": 1,
                "shortName": "АО «СОГАЗ»",
                "offerUrl": "https://direct.sogaz.ru/products/persona/rail-passenger/rules.pdf",
                "insuranceCost": 150,
            },
        ],
        "timestamp": "20.03.2022 18:40:15.065",
    }


@pytest.fixture
def train_info_rejected_payload():
    """Seat availability reply for a wrong departure date."""
    return {
        "result": "OK",
        "lst": [
            {
                "result": "FAIL",
                "type": "NEGATIVE_RESPONSE",
                "error": "Неверная дата отправления",
                "detail": "Неверная дата отправления",
                "timestamp": "30.03.2022 13:54:43.191",
            }
        ],
        "schemes": [],
        "timestamp": "01.04.2022 13:54:43.191",
    }


@pytest.fixture
def trip_payload():
    """Stops of train 001А."""
    return {
        "GtExpress_Response": {
            "ReqExpressZK": 3263309,
            "Train": {
                "Route": {"Station": ["С-ПЕТЕР-ГЛ", "МОСКВА ОКТ"], "CodeFrom": 2004001, "CodeTo": 2006004},
                "Number": "001А",
            },
            "Version": "2.7.81",
            "Routes": {
                "Stop": [
                    {"Station": "С-ПЕТЕР-ГЛ", "Distance": 0, "Days": "00", "DepTime": "23:55", "Code": 2004001},
                    {"ArvTime": "07:55", "Station": "МОСКВА ОКТ", "Distance": 650, "Days": "01", "Code": 2006004},
                ],
                "Title": "ОСНОВНОЙ МАРШРУТ",
            },
            "Type": "TrainRoute",
        }
    }


@pytest.fixture
def trip_rejected_payload():
    """Train route reply for a wrong departure date."""
    return {
        "GtExpress_Response": {
            "ReqExpressZK": 3189015,
            "Error": {"content": "Неверная дата отправления.", "Code": 2010},
            "Version": "2.7.86",
            "Type": "TrainRoute",
        }
    }


@pytest.fixture
def station_payload():
    """Station suggestions for "ВО"."""
    return [
        {"n": "ВОЕННОЕ ШОССЕ", "c": 2034058, "S": 4, "L": 0},
        {"n": "БУРЛИТ-ВОЛОЧАЕВСКИЙ", "c": 2034458, "S": 0, "L": 2},
        {"n": "ВОРОПАЕВО", "c": 2100047, "S": 0, "L": 4},
    ]
