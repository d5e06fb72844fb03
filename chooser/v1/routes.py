# v1 HTTP contract; frozen once deployed
from typing import Iterator

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from . import VERSION, instances, options, results, selections, templates
from .models import CreateChooserIn, PublishIn, ReplaceOptionsIn, SubmitSelectionsIn

router = APIRouter(prefix=f"/api/{VERSION}")


def get_session(request: Request) -> Iterator[Session]:
    with request.app.state.v1_db.session() as session:
        yield session


@router.get("/health")
def health():
    return {"status": "ok", "version": VERSION}


@router.get("/templates")
def list_templates(session: Session = Depends(get_session)):
    return {"templates": [templates.to_dict(t) for t in templates.list_all(session)]}


@router.post("/choosers", status_code=201)
def create_chooser(body: CreateChooserIn, session: Session = Depends(get_session)):
    instance = instances.create(
        session,
        body.template_slug,
        body.title,
        body.description,
        body.selection_labels,
    )
    return {
        "success": True,
        "instance_id": instance.id,
        "admin_id": instance.admin_id,
        "participant_url": instances.participant_url(instance),
        "admin_url": instances.admin_url(instance),
        "published": False,
    }


@router.get("/choosers/{chooser_id}")
def get_chooser(chooser_id: str, session: Session = Depends(get_session)):
    instance, opts = instances.get_by_id(session, chooser_id)
    return instances.public_view(instance, opts)


@router.put("/choosers/{chooser_id}/options")
def replace_options(
    chooser_id: str, body: ReplaceOptionsIn, session: Session = Depends(get_session)
):
    count = options.replace_all(session, chooser_id, body.admin_id, body.options)
    return {"success": True, "options_count": count}


@router.put("/choosers/{chooser_id}/publish")
def publish_chooser(chooser_id: str, body: PublishIn, session: Session = Depends(get_session)):
    changed = instances.publish(session, chooser_id, body.admin_id)
    message = "Chooser published successfully" if changed else "Chooser is already published"
    return {"success": True, "message": message, "published": True}


@router.post("/choosers/{chooser_id}/selections")
def submit_selections(
    chooser_id: str, body: SubmitSelectionsIn, session: Session = Depends(get_session)
):
    count = selections.submit(session, chooser_id, body.participant_name, body.selections)
    return {
        "success": True,
        "participant_name": body.participant_name,
        "selections_count": count,
    }


@router.get("/choosers/{chooser_id}/results")
def get_results(chooser_id: str, session: Session = Depends(get_session)):
    return results.get_results(session, chooser_id)
