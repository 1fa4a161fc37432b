from __future__ import annotations
from typing import List

from flask import Blueprint, abort, current_app, request

from flask_documented.decorators.documented import describe, documented
from flask_documented.openapi_parts.route import route
from flask_documented.openapi_parts.schemas import to_jsonable
from .models import EXAMPLE_PET, Pet, PetStatus

pets_bp = Blueprint('pets', __name__)
test_bp = Blueprint('test', __name__)


def _store():
    return current_app.extensions['petstore']


def _pet_from_request() -> Pet:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        abort(405, description='Invalid input')
    try:
        pet = Pet.from_json(data)
    except (TypeError, ValueError):
        abort(405, description='Invalid input')
    if not pet.name:
        abort(405, description='name required')
    return pet


ADD_PET = (
    route(summary='Add a new pet to the store', tags=['pet'])
    .request_body(Pet, description='Pet object that needs to be added to the store', example=EXAMPLE_PET)
    .response(201, 'Pet created', schema=Pet)
    .response(405, 'Invalid input')
)


@pets_bp.post('/pet')
@describe(ADD_PET)
def add_pet():
    pet = _store().add(_pet_from_request())
    return to_jsonable(pet), 201


UPDATE_PET = (
    route(summary='Update an existing pet', tags=['pet'])
    .request_body(Pet, description='Pet object that needs to be added to the store')
    .response(200, 'Pet updated', schema=Pet)
    .response(400, 'Invalid ID supplied')
    .response(404, 'Pet not found')
    .response(405, 'Validation exception')
)


@pets_bp.put('/pet')
@describe(UPDATE_PET)
def update_pet():
    pet = _pet_from_request()
    if pet.id <= 0:
        abort(400, description='Invalid ID supplied')
    updated = _store().update(pet)
    if updated is None:
        abort(404, description='Pet not found')
    return to_jsonable(updated)


FIND_BY_STATUS = (
    route(summary='Finds Pets by status', tags=['pet'])
    .description('Multiple status values can be provided with comma separated strings')
    .param('status', 'query', schema=PetStatus, required=True,
           description='Status values that need to be considered for filter')
    .response(200, 'Successful operation', schema=List[Pet])
    .response(400, 'Invalid status value')
)


@pets_bp.get('/pet/findByStatus')
@describe(FIND_BY_STATUS)
def find_by_status():
    raw = request.args.get('status')
    if not raw:
        abort(400, description='Invalid status value')
    try:
        statuses = [PetStatus(s.strip()) for s in raw.split(',') if s.strip()]
    except ValueError:
        abort(400, description='Invalid status value')
    return {'data': to_jsonable(_store().find_by_status(statuses))}


FIND_BY_TAGS = (
    route(summary='Finds Pets by tags', tags=['pet'], deprecated=True)
    .description('Multiple tags can be provided with comma separated strings. Use tag1, tag2, tag3 for testing.')
    .param('tags', 'query', schema=List[str], required=True, description='Tags to filter by')
    .response(200, 'Successful operation', schema=List[Pet])
    .response(400, 'Invalid tag value')
)


@pets_bp.get('/pet/findByTags')
@describe(FIND_BY_TAGS)
def find_by_tags():
    raw = request.args.get('tags')
    if not raw:
        abort(400, description='Invalid tag value')
    names = [t.strip() for t in raw.split(',') if t.strip()]
    return {'data': to_jsonable(_store().find_by_tags(names))}


GET_PET = (
    route(summary='Find pet by ID', tags=['pet'], operation_id='getPetById')
    .param('pet_id', 'path', schema=int, description='ID of pet to return')
    .response(200, 'Successful operation', schema=Pet)
    .response(404, 'Pet not found')
)


@pets_bp.get('/pet/<int:pet_id>')
@describe(GET_PET)
def get_pet(pet_id: int):
    pet = _store().get(pet_id)
    if pet is None:
        abort(404, description='Pet not found')
    return to_jsonable(pet)


def _echo_id(id):
    return {'id': id}


def _list_tests():
    return {'data': []}


test_bp.add_url_rule(
    '/test/<id>',
    view_func=documented(route().param('id', 'path', allow_empty_value=True), _echo_id),
    methods=['POST'],
)
# intentionally undocumented
test_bp.add_url_rule('/test', view_func=_list_tests, methods=['GET'])
