"""
Wire records for the JSONL event stream.

Field names follow the instrumentation shim (runId, action, data, callDone);
snake_case names are accepted as well.
"""

from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.errors import EventDecodeError
from ..core.events import ActionEvent, Event, RunInitialized, Timestamp


class RunInitializedRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: Literal["RunInitialized"] = "RunInitialized"
    run_id: str = Field(alias="runId")
    timestamp: Timestamp = 0
    state: Any = None

    def to_event(self) -> RunInitialized:
        return RunInitialized(run_id=self.run_id, timestamp=self.timestamp, state=self.state)


class ActionEventRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: Literal["ActionEvent"] = "ActionEvent"
    run_id: str = Field(alias="runId")
    action_path: str = Field(alias="action")
    payload: Any = Field(default=None, alias="data")
    is_completion: bool = Field(default=False, alias="callDone")
    result: Any = None
    timestamp: Timestamp = 0

    def to_event(self) -> ActionEvent:
        return ActionEvent(
            run_id=self.run_id,
            action_path=self.action_path,
            payload=self.payload,
            is_completion=self.is_completion,
            result=self.result,
            timestamp=self.timestamp,
        )


RECORD_TYPES = {
    RunInitialized.type: RunInitializedRecord,
    ActionEvent.type: ActionEventRecord,
}


def parse_event(record: Dict[str, Any]) -> Event:
    """
    Decode one wire record.

    The record type is read from "type"; when absent, a record carrying a
    "state" key is a RunInitialized, anything else an ActionEvent.

    Raises:
        EventDecodeError: If the record is not an object, has an unknown
            type or fails validation
    """
    if not isinstance(record, dict):
        raise EventDecodeError(f"Event record must be an object, got {type(record).__name__}")

    event_type = record.get("type")
    if event_type is None:
        event_type = RunInitialized.type if "state" in record else ActionEvent.type

    model = RECORD_TYPES.get(event_type)
    if model is None:
        raise EventDecodeError(f"Unknown event type: {event_type}")

    try:
        return model.model_validate({**record, "type": event_type}).to_event()
    except ValidationError as e:
        raise EventDecodeError(f"Invalid {event_type} record: {e}") from e


def event_to_dict(event: Event) -> Dict[str, Any]:
    """Encode an event as a wire record (shim field names)."""
    if isinstance(event, RunInitialized):
        record = RunInitializedRecord(
            run_id=event.run_id, timestamp=event.timestamp, state=event.state
        )
    else:
        record = ActionEventRecord(
            run_id=event.run_id,
            action_path=event.action_path,
            payload=event.payload,
            is_completion=event.is_completion,
            result=event.result,
            timestamp=event.timestamp,
        )
    return record.model_dump(by_alias=True)
