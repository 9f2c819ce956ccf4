"""HTTP routes for the leaderboard."""

from flask import jsonify, request
from flask_login import current_user, login_required

from records import current_records
from utils import parse_flag, parse_number

from . import bp
from .engine import RankingEngine, RankingScope


@bp.route("")
@login_required
def ranking():
    """
    ?friendsOnly=true ranks the user and their friends; userId defaults to
    the logged-in user. Without the flag every user is ranked.
    """
    if parse_flag(request.args.get("friendsOnly", "")):
        user_id = parse_number(request.args.get("userId"), "userId", integer=True, default=current_user.id)
        scope = RankingScope.for_friends_of(user_id)
    else:
        scope = RankingScope.global_()

    entries = RankingEngine(current_records()).compute_ranking(scope)
    return jsonify([e.to_dict() for e in entries])
