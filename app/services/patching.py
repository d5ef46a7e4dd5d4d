from pydantic import BaseModel


def apply_partial_update(existing: BaseModel, payload: BaseModel):
    """Overlay supplied fields from an update payload onto a stored record.

    None and empty strings mean "leave unchanged", so a field cannot be
    cleared to an empty string through an update.
    """
    updates = {
        field: value
        for field, value in payload.model_dump(exclude_none=True).items()
        if value != ""
    }
    return existing.model_copy(update=updates)
