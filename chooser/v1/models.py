from typing import Any, List, Optional

from pydantic import BaseModel, Field


class CreateChooserIn(BaseModel):
    # presence is checked by the repository so both report as one 400
    template_slug: Optional[str] = Field(None, examples=["simple_poll"])
    title: Optional[str] = Field(None, examples=["Lunch"])
    description: Optional[str] = None
    selection_labels: Optional[List[str]] = Field(None, examples=[["no", "ok", "ideal"]])


class OptionIn(BaseModel):
    """
    Item fields are validated after the admin check, so they stay optional here.
    """
    value: Optional[str] = Field(None, examples=["Pizza"])
    order: Optional[int] = Field(None, examples=[0])
    metadata: Optional[Any] = None


class ReplaceOptionsIn(BaseModel):
    admin_id: str
    options: List[OptionIn]


class PublishIn(BaseModel):
    admin_id: str


class SelectionIn(BaseModel):
    option_id: Optional[int] = Field(None, examples=[1])
    selection_value: Optional[str] = Field(None, examples=["ok"])


class SubmitSelectionsIn(BaseModel):
    participant_name: str = Field(..., examples=["Alice"])
    selections: List[SelectionIn]
