from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional

class DistanceResult(BaseModel):
    # serialized as {distance, duration, durationInSeconds, routeFound, error}
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    distance: str
    duration: str
    duration_in_seconds: int
    route_found: bool
    error: Optional[str] = None
