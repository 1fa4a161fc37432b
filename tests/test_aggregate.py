import copy
import logging

import pytest
from flask import Flask

from flask_documented.decorators.documented import documented
from flask_documented.errors import DuplicateOperationError, IntegrationError, InvalidArgument
from flask_documented.openapi_builder import aggregate, api_document
from flask_documented.openapi_parts.helpers import openapi_path
from flask_documented.openapi_parts.registrations import RouteRegistration, list_registrations
from flask_documented.openapi_parts.route import route


def _noop(**kwargs):
    return ''


def _two_route_app():
    app = Flask(__name__)
    op = route().param('id', 'path', allow_empty_value=True)
    app.add_url_rule('/test/<id>', 'post_test', documented(op, _noop), methods=['POST'])
    app.add_url_rule('/test', 'get_test', _noop, methods=['GET'])
    return app


def test_skips_undocumented_routes():
    app = _two_route_app()
    doc = aggregate(api_document('Test'), list_registrations(app))
    assert list(doc['paths']) == ['/test/{id}']
    assert list(doc['paths']['/test/{id}']) == ['post']
    assert '/test' not in doc['paths']
    param = doc['paths']['/test/{id}']['post']['parameters'][0]
    assert param == {'name': 'id', 'in': 'path', 'required': True, 'allowEmptyValue': True,
                     'schema': {'type': 'string'}}


def test_last_registration_wins():
    app = Flask(__name__)
    first = {'summary': 'first', 'responses': {}}
    second = {'summary': 'second', 'responses': {}}
    app.add_url_rule('/ping', 'ping_a', documented(first, _noop), methods=['GET'])
    app.add_url_rule('/ping', 'ping_b', documented(second, _noop), methods=['GET'])
    doc = aggregate({}, list_registrations(app))
    assert doc['paths']['/ping']['get'] == second


def test_duplicate_logs_warning(caplog):
    app = Flask(__name__)
    app.add_url_rule('/ping', 'ping_a', documented({'summary': 'a'}, _noop))
    app.add_url_rule('/ping', 'ping_b', documented({'summary': 'b'}, _noop))
    with caplog.at_level(logging.WARNING, logger='flask_documented.openapi_builder'):
        aggregate({}, list_registrations(app))
    assert any('documented twice' in r.getMessage() for r in caplog.records)


def test_strict_duplicate_policy_raises():
    app = Flask(__name__)
    app.add_url_rule('/ping', 'ping_a', documented({'summary': 'a'}, _noop))
    app.add_url_rule('/ping', 'ping_b', documented({'summary': 'b'}, _noop))
    with pytest.raises(DuplicateOperationError):
        aggregate({}, list_registrations(app), on_duplicate='error')


def test_unknown_duplicate_policy_rejected():
    with pytest.raises(InvalidArgument):
        aggregate({}, [], on_duplicate='merge')


def test_aggregate_is_idempotent():
    app = _two_route_app()
    regs = list_registrations(app)
    once = aggregate(api_document('Test'), regs)
    twice = aggregate(aggregate(api_document('Test'), regs), regs, on_duplicate='error')
    assert once == twice


def test_document_detached_from_operation():
    op = {'summary': 'Ping', 'responses': {'200': {'description': 'pong'}}}
    regs = [RouteRegistration('/ping', 'GET', 'ping', documented(op, _noop), op)]
    doc = aggregate({}, regs)
    op['responses']['200']['description'] = 'changed'
    assert doc['paths']['/ping']['get']['responses']['200']['description'] == 'pong'


def test_registration_carries_optional_operation():
    app = _two_route_app()
    regs = {(r.path, r.method): r for r in list_registrations(app)}
    assert regs[('/test/<id>', 'POST')].documented
    assert regs[('/test/<id>', 'POST')].endpoint == 'post_test'
    assert regs[('/test', 'GET')].operation is None
    assert not regs[('/test', 'GET')].documented


def test_implicit_head_and_options_not_listed():
    app = Flask(__name__)
    app.add_url_rule('/items', 'items', documented({'summary': 'List'}, _noop), methods=['GET'])
    app.add_url_rule('/probe', 'probe', documented({'summary': 'Probe'}, _noop), methods=['HEAD'])
    methods = {(r.path, r.method) for r in list_registrations(app)}
    assert ('/items', 'GET') in methods
    assert ('/items', 'HEAD') not in methods
    assert ('/items', 'OPTIONS') not in methods
    assert ('/probe', 'HEAD') in methods
    doc = aggregate({}, list_registrations(app))
    assert list(doc['paths']['/items']) == ['get']
    assert list(doc['paths']['/probe']) == ['head']


def test_multiple_methods_on_one_rule():
    app = Flask(__name__)
    op = {'summary': 'Pets'}
    app.add_url_rule('/pets', 'pets', documented(op, _noop), methods=['POST', 'PUT'])
    doc = aggregate({}, list_registrations(app))
    assert doc['paths']['/pets'] == {'put': op, 'post': op}


def test_host_without_introspection_is_fatal():
    class BareRouter:
        def add_url_rule(self, *args, **kwargs):
            pass

    with pytest.raises(IntegrationError):
        list_registrations(BareRouter())


@pytest.mark.parametrize('rule,expected', [
    ('/test/<id>', '/test/{id}'),
    ('/pet/<int:pet_id>', '/pet/{pet_id}'),
    ('/files/<path:name>/raw', '/files/{name}/raw'),
    ('/c/<string(length=2):code>', '/c/{code}'),
    ('/static/plain', '/static/plain'),
])
def test_openapi_path(rule, expected):
    assert openapi_path(rule) == expected


def test_component_schemas_merged():
    from flask_documented.petstore.models import Pet
    op = route(summary='Add').request_body(Pet)
    regs = [RouteRegistration('/pet', 'POST', 'add', documented(op, _noop), op)]
    doc = aggregate(api_document('Pets'), regs)
    body = doc['paths']['/pet']['post']['requestBody']['content']['application/json']['schema']
    assert body == {'$ref': '#/components/schemas/Pet'}
    assert {'Pet', 'Category', 'Tag'} <= set(doc['components']['schemas'])


def test_existing_component_schema_kept():
    from flask_documented.petstore.models import Pet
    doc = api_document('Pets')
    doc['components'] = {'schemas': {'Pet': {'type': 'object', 'description': 'hand written'}}}
    before = copy.deepcopy(doc['components']['schemas']['Pet'])
    op = route().request_body(Pet)
    aggregate(doc, [RouteRegistration('/pet', 'POST', 'add', documented(op, _noop), op)])
    assert doc['components']['schemas']['Pet'] == before


def test_explicit_get_head_documents_get_only():
    # Werkzeug adds HEAD to GET rules without recording it, so both forms look alike
    app = Flask(__name__)
    app.add_url_rule('/a', 'a', documented({'summary': 'A'}, _noop), methods=['GET', 'HEAD'])
    app.add_url_rule('/b', 'b', documented({'summary': 'B'}, _noop), methods=['GET'])
    methods = [(r.path, r.method) for r in list_registrations(app) if r.path in ('/a', '/b')]
    assert methods == [('/a', 'GET'), ('/b', 'GET')]


def test_explicit_options_documented():
    app = Flask(__name__)
    app.add_url_rule('/opt', 'opt', documented({'summary': 'Opt'}, _noop), methods=['OPTIONS'])
    doc = aggregate({}, list_registrations(app))
    assert list(doc['paths']['/opt']) == ['options']
