"""CLI command tests."""
from quotedesk import db
from quotedesk.models import User


def test_create_admin(runner, db_ctx):
    result = runner.invoke(args=['create-admin', '--email', 'root@example.com', '--password', 'pw-123456'])
    assert 'Created admin admin.' in result.output
    user = User.query.filter_by(username='admin').first()
    assert user.is_admin()
    assert user.check_password('pw-123456')


def test_create_admin_promotes_existing_user(runner, member):
    result = runner.invoke(args=['create-admin', '--username', member.username,
                                 '--email', member.email, '--password', 'new-pass'])
    assert 'Promoted admin' in result.output
    db.session.expire_all()
    assert User.query.filter_by(username=member.username).first().is_admin()
