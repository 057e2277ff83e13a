"""Auth routes."""
from flask import jsonify
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf

from quotedesk.blueprints.auth import auth_bp
from quotedesk.errors import ValidationError
from quotedesk.forms import LoginForm
from quotedesk.models import User


@auth_bp.route('/csrf-token')
def csrf_token():
    return jsonify({'success': True, 'csrf_token': generate_csrf()})


@auth_bp.route('/login', methods=['POST'])
def login():
    form = LoginForm()
    if not form.validate_on_submit():
        raise ValidationError('Validation failed', form.errors)
    user = User.query.filter_by(username=form.username.data).first()
    if user is None or not user.check_password(form.password.data):
        return jsonify({'success': False, 'message': 'Invalid username or password.'}), 401
    if not user.is_active:
        return jsonify({'success': False, 'message': 'Account is disabled.'}), 403
    login_user(user, remember=form.remember_me.data)
    return jsonify({'success': True, 'user': user.to_dict()})


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True})


@auth_bp.route('/me')
@login_required
def me():
    return jsonify({'success': True, 'user': current_user.to_dict()})
