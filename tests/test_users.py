from bson import ObjectId

from conftest import add_user, bearer


def test_create_user_inserts_with_student_role(client, store) -> None:
    response = client.post('/users', json={'email': 'a@x.com', 'name': 'Ada'})

    assert response.status_code == 200
    body = response.json()
    assert body['acknowledged'] is True
    stored = store.collection('users').documents
    assert len(stored) == 1
    assert str(stored[0]['_id']) == body['insertedId']
    assert stored[0]['role'] == 'student'
    assert stored[0]['name'] == 'Ada'


def test_create_user_twice_reports_existing_user(client, store) -> None:
    client.post('/users', json={'email': 'a@x.com'})

    response = client.post('/users', json={'email': 'a@x.com'})

    assert response.status_code == 200
    assert response.json() == {'message': 'User already exists'}
    assert len(store.collection('users').documents) == 1


def test_create_user_keeps_extra_fields(client, store) -> None:
    client.post('/users', json={'email': 'a@x.com', 'photoURL': 'https://img.example.com/a.png'})

    assert store.collection('users').documents[0]['photoURL'] == 'https://img.example.com/a.png'


def test_create_user_rejects_invalid_email(client, store) -> None:
    response = client.post('/users', json={'email': 'not-an-email'})

    assert response.status_code == 422
    assert store.collection('users').documents == []


def test_list_users_renders_ids_as_strings(client, store) -> None:
    user_id = add_user(store, 'a@x.com')

    response = client.get('/users')

    assert response.status_code == 200
    assert response.json() == [{'_id': user_id, 'email': 'a@x.com', 'name': 'Test', 'role': 'student'}]


def test_promoted_admin_sees_admin_true_with_matching_claim(client, store) -> None:
    user_id = add_user(store, 'boss@x.com')

    promote = client.patch(f'/users/admin/{user_id}')
    check = client.get('/users/admin/boss@x.com', headers=bearer('boss@x.com'))

    assert promote.json() == {'acknowledged': True, 'matchedCount': 1, 'modifiedCount': 1, 'upsertedId': None}
    assert check.json() == {'admin': True}


def test_admin_check_with_mismatched_claim_is_false(client, store) -> None:
    add_user(store, 'boss@x.com', role='admin')

    response = client.get('/users/admin/boss@x.com', headers=bearer('someone@x.com'))

    assert response.status_code == 200
    assert response.json() == {'admin': False}


def test_instructor_check_reflects_stored_role(client, store) -> None:
    user_id = add_user(store, 'teacher@x.com')

    before = client.get('/users/instructor/teacher@x.com', headers=bearer('teacher@x.com'))
    client.patch(f'/users/instructor/{user_id}')
    after = client.get('/users/instructor/teacher@x.com', headers=bearer('teacher@x.com'))

    assert before.json() == {'instructor': False}
    assert after.json() == {'instructor': True}


def test_role_check_for_unknown_user_is_false(client) -> None:
    response = client.get('/users/instructor/ghost@x.com', headers=bearer('ghost@x.com'))

    assert response.json() == {'instructor': False}


def test_promote_unknown_user_returns_404(client) -> None:
    response = client.patch(f'/users/admin/{ObjectId()}')

    assert response.status_code == 404
    assert response.json() == {'detail': 'User not found'}


def test_promote_with_malformed_id_returns_400(client) -> None:
    response = client.patch('/users/instructor/not-an-id')

    assert response.status_code == 400
    assert response.json() == {'detail': 'Invalid id'}


def test_delete_user_removes_document(client, store) -> None:
    user_id = add_user(store, 'a@x.com')

    response = client.delete(f'/users/{user_id}')

    assert response.status_code == 200
    assert response.json() == {'message': 'User deleted successfully'}
    assert store.collection('users').documents == []


def test_delete_unknown_user_returns_not_found(client) -> None:
    response = client.delete(f'/users/{ObjectId()}')

    assert response.status_code == 404
    assert response.json() == {'detail': 'User not found'}


def test_delete_user_with_malformed_id_returns_400(client) -> None:
    response = client.delete('/users/123')

    assert response.status_code == 400


def test_registration_ignores_requested_role(client, store) -> None:
    response = client.post('/users', json={'email': 'evil@x.com', 'role': 'admin'})

    assert response.status_code == 200
    assert store.collection('users').documents[0]['role'] == 'student'
    check = client.get('/users/admin/evil@x.com', headers=bearer('evil@x.com'))
    assert check.json() == {'admin': False}


def test_mixed_case_email_matches_its_own_role(client, store) -> None:
    client.post('/users', json={'email': 'Ann@Example.COM'})
    user_id = str(store.collection('users').documents[0]['_id'])
    client.patch(f'/users/admin/{user_id}')

    response = client.get('/users/admin/Ann@Example.COM', headers=bearer('Ann@Example.COM'))

    assert store.collection('users').documents[0]['email'] == 'ann@example.com'
    assert response.json() == {'admin': True}


def test_mixed_case_registration_is_a_duplicate(client, store) -> None:
    client.post('/users', json={'email': 'ann@example.com'})

    response = client.post('/users', json={'email': 'ANN@example.com'})

    assert response.json() == {'message': 'User already exists'}
    assert len(store.collection('users').documents) == 1
