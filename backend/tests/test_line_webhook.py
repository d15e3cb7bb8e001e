import base64
import hashlib
import hmac
import json

from fastapi.testclient import TestClient

from carrynote.line.client import LineMessenger, validate_signature
from carrynote.main import app

client = TestClient(app)

# 2025-01-05 09:00 JST
TIMESTAMP = 1736035200000


def text_event(text, user_id='U-line-1', reply_token='reply-1'):
    return {
        'type': 'message',
        'replyToken': reply_token,
        'timestamp': TIMESTAMP,
        'source': {'type': 'user', 'userId': user_id},
        'message': {'type': 'text', 'id': '1', 'text': text},
    }


def post_events(*events, headers=None):
    return client.post('/api/line/webhook', json={'events': list(events)}, headers=headers)


def setup_driver_and_types():
    d = client.post('/api/drivers/', json={'name': '山田太郎'}).json()
    res = client.post('/api/line/link', json={'driver_id': d['id'], 'line_user_id': 'U-line-1'})
    assert res.status_code == 200
    client.post('/api/delivery-types/', json={'name': 'ヤマト', 'unit_price': 150})
    return d


def test_partial_report_is_recorded(messenger):
    d = setup_driver_and_types()
    res = post_events(text_event('ヤマト30\n存在しないタイプ20\nメモ:順調'))
    assert res.status_code == 200
    assert res.json() == {'success': True}

    reports = client.get(f"/api/daily-reports/?driver_id={d['id']}").json()
    assert len(reports) == 1
    report = reports[0]
    assert report['date'] == '2025-01-05'
    assert report['notes'] == '順調'
    assert report['source'] == 'line'
    assert [(x['delivery_type_name'], x['quantity'], x['amount']) for x in report['details']] == [
        ('ヤマト', 30, 4500)
    ]

    token, text = messenger.replies[0]
    assert token == 'reply-1'
    assert '📦 合計: 30個' in text
    assert '• 存在しないタイプ' in text


def test_nothing_recognized_is_not_recorded(messenger):
    setup_driver_and_types()
    post_events(text_event('おはようございます'))
    assert client.get('/api/daily-reports/').json() == []
    assert messenger.replies[0][1].startswith('❌ 配送タイプと個数を認識できませんでした。')


def test_no_matches_lists_types(messenger):
    setup_driver_and_types()
    post_events(text_event('謎の便20'))
    assert client.get('/api/daily-reports/').json() == []
    assert '登録済みの配送タイプ:\n• ヤマト' in messenger.replies[0][1]


def test_unknown_sender_gets_guidance(messenger):
    setup_driver_and_types()
    post_events(text_event('ヤマト30', user_id='U-stranger'))
    assert client.get('/api/daily-reports/').json() == []
    assert 'ドライバー登録が見つかりません' in messenger.replies[0][1]


def test_help_and_format_commands(messenger):
    setup_driver_and_types()
    post_events(text_event('ヘルプ'), text_event('format', reply_token='reply-2'))
    assert messenger.replies[0][1].startswith('📚 Carry Note')
    assert messenger.replies[1][0] == 'reply-2'
    assert messenger.replies[1][1].startswith('📝 日報フォーマット')
    assert client.get('/api/daily-reports/').json() == []


def test_non_text_events_are_ignored(messenger):
    setup_driver_and_types()
    sticker = text_event('')
    sticker['message'] = {'type': 'sticker', 'id': '2'}
    res = post_events(sticker, {'type': 'follow', 'replyToken': 'x'})
    assert res.status_code == 200
    assert messenger.replies == []


def test_malformed_events_are_ignored(messenger):
    setup_driver_and_types()
    bad_message = text_event('ヤマト10')
    bad_message['message'] = 'ヤマト10'
    bad_source = text_event('ヤマト10', reply_token='reply-2')
    bad_source['source'] = 'U-line-1'
    bad_text = text_event('')
    bad_text['message']['text'] = 10
    res = post_events(
        {'type': 'message', 'message': 'x'}, bad_message, bad_source, bad_text, 'event', None
    )
    assert res.status_code == 200
    assert res.json() == {'success': True}
    assert client.get('/api/daily-reports/').json() == []
    # source のない送信者は未登録扱い
    assert [token for token, _ in messenger.replies] == ['reply-2']
    assert 'ドライバー登録が見つかりません' in messenger.replies[0][1]

    assert client.post('/api/line/webhook', json={'events': 'x'}).status_code == 200
    assert client.post('/api/line/webhook', json={'events': 5}).status_code == 200


def test_reply_failure_keeps_report(failing_messenger):
    setup_driver_and_types()
    res = post_events(text_event('ヤマト10'))
    assert res.status_code == 200
    reports = client.get('/api/daily-reports/').json()
    assert len(reports) == 1
    assert reports[0]['details'][0]['quantity'] == 10


def test_signature_is_verified(monkeypatch, messenger):
    setup_driver_and_types()
    monkeypatch.setenv('LINE_CHANNEL_SECRET', 'channel-secret')
    body = json.dumps({'events': [text_event('ヤマト5')]}).encode()

    bad = client.post('/api/line/webhook', content=body, headers={'X-Line-Signature': 'wrong'})
    assert bad.status_code == 401

    signature = base64.b64encode(hmac.new(b'channel-secret', body, hashlib.sha256).digest()).decode()
    ok = client.post('/api/line/webhook', content=body, headers={'X-Line-Signature': signature})
    assert ok.status_code == 200
    assert len(client.get('/api/daily-reports/').json()) == 1


def test_validate_signature():
    body = b'{"events":[]}'
    signature = base64.b64encode(hmac.new(b's', body, hashlib.sha256).digest()).decode()
    assert validate_signature(body, signature, 's')
    assert not validate_signature(body, signature, 'other')
    assert not validate_signature(body, None, 's')


def test_invalid_json_body(messenger):
    res = client.post('/api/line/webhook', content=b'not json')
    assert res.status_code == 400


def test_link_errors():
    assert client.post('/api/line/link', json={'driver_id': 'x'}).status_code == 400
    assert client.post('/api/line/link', json={'driver_id': 'x', 'line_user_id': 'U'}).status_code == 404

    a = client.post('/api/drivers/', json={'name': 'A'}).json()
    b = client.post('/api/drivers/', json={'name': 'B'}).json()
    client.post('/api/line/link', json={'driver_id': a['id'], 'line_user_id': 'U-1'})
    res = client.post('/api/line/link', json={'driver_id': b['id'], 'line_user_id': 'U-1'})
    assert res.status_code == 409


def test_report_filters_and_get(messenger):
    d = setup_driver_and_types()
    post_events(text_event('ヤマト10'))
    report_id = client.get('/api/daily-reports/').json()[0]['id']

    assert client.get(f'/api/daily-reports/{report_id}').json()['driver_name'] == '山田太郎'
    assert client.get('/api/daily-reports/missing').status_code == 404
    assert client.get('/api/daily-reports/?date_from=2025-01-06').json() == []
    assert len(client.get('/api/daily-reports/?date_to=2025-01-05').json()) == 1
    assert client.get(f"/api/daily-reports/?driver_id={d['id']}x").json() == []


def test_messenger_skips_without_token():
    messenger = LineMessenger(access_token=None, api_base='https://api.line.me')
    assert messenger.reply('token', 'hello') is False
