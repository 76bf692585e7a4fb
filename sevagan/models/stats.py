from sevagan.models.base import CamelModel


class StatsResponse(CamelModel):
    donors: int
    requests: int
    requests_today: int
    accounts: int
    subscribers: int
