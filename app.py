from flask import Flask, jsonify

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from sumcheck_routes import sumcheck_bp, init_sumcheck_bp

# 세션별 프로토콜 상태는 TinyDB에 둔다 (type: "<sid>.<name>")
# 평가 테이블이 쿠키 크기 제한을 넘을 수 있으므로 Flask 세션에는 sid만 저장한다
DEFAULT_CONFIG = {
    "SECRET_KEY": "key",
    # 오라클 질의 비용이 2^v 이므로 요청 하나가 감당할 수 있는 크기로 제한
    "SUMCHECK_MAX_VARIABLES": 10,
    # None이면 세션마다 무작위 트랜스크립트 레이블을 사용
    "SUMCHECK_CHALLENGE_SEED": None,
    # None이면 메모리 DB, 경로를 주면 파일 DB (예: "db.json")
    "SUMCHECK_DB_PATH": None,
    # 이 시간(초) 동안 갱신되지 않은 세션은 새 세션을 열 때 삭제된다
    "SUMCHECK_SESSION_TTL": 3600,
}


def create_db(path=None):
    """TinyDB를 생성한다. path가 없으면 메모리 저장소를 사용한다."""
    if path is None:
        return TinyDB(storage=MemoryStorage)
    return TinyDB(path)


def create_app(config=None):
    """Flask 앱을 생성한다.

    Args:
        config: DEFAULT_CONFIG를 덮어쓸 설정 dict (테스트에서 사용)
    """
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    app.config.from_prefixed_env("SUMCHECK_APP")
    if config is not None:
        app.config.update(config)

    init_sumcheck_bp(create_db(app.config["SUMCHECK_DB_PATH"]))
    app.register_blueprint(sumcheck_bp)

    @app.route("/", methods=["GET"])
    def main():
        return jsonify({
            "name": "sumcheck",
            "max_variables": app.config["SUMCHECK_MAX_VARIABLES"],
            "endpoints": sorted(
                str(rule) for rule in app.url_map.iter_rules()
                if rule.endpoint.startswith("sumcheck.")
            ),
        })

    return app


app = create_app()


if __name__ == "__main__":
    app.run(debug=True)
