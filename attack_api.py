import logging, time
from datetime import datetime
from flask import Blueprint, request, jsonify
from redis import Redis
from redis.exceptions import RedisError
from rq import Queue
from rq.job import Job
from rq.exceptions import NoSuchJobError

from attack_worker import JOB_KINDS
from rsattack.config import Settings
from rsattack.errors import AttackError
from rsattack.numeric import check_public_inputs

logger = logging.getLogger(__name__)

jobs_bp = Blueprint("jobs_bp", __name__)

settings = Settings.from_env()
redis_conn = Redis.from_url(settings.redis_url)
attack_q = Queue(settings.queue_name, connection=redis_conn, default_timeout=settings.job_timeout_s)

# ------------------ helpers ------------------
def _age_secs(dt: datetime | None) -> float | None:
    if not dt:
        return None
    return max(0.0, time.time() - dt.timestamp())

def _job_dict(job: Job) -> dict:
    d = {
        "job_id": job.id,
        "status": job.get_status(),
        "meta": job.meta or {},
        "enqueued_at": job.enqueued_at.isoformat() if job.enqueued_at else None,
        "started_at": job.started_at.isoformat() if job.started_at else None,
        "ended_at": job.ended_at.isoformat() if job.ended_at else None,
        "age_sec": _age_secs(job.enqueued_at),
    }
    if job.is_finished:
        d["result"] = job.return_value()
    if job.is_failed:
        d["exc_info"] = (job.exc_info or "")[-1024:]
    return d

def client_ip() -> str:
    xff = request.headers.get("X-Forwarded-For", "")
    return xff.split(",")[0].strip() if xff else (request.remote_addr or "")

def ip_can_start(ip: str) -> bool:
    """Allow only one active (queued or started) job per IP."""
    ids = list(attack_q.started_job_registry.get_job_ids()) + list(attack_q.get_job_ids())
    for jid in ids:
        try:
            j = Job.fetch(jid, connection=redis_conn)
        except NoSuchJobError:
            continue
        if (j.meta or {}).get("ip") == ip:
            return False
    return True

# ------------------ API ------------------
@jobs_bp.errorhandler(RedisError)
def redis_down(exc):
    logger.warning("redis unavailable: %s", exc.__class__.__name__)
    return jsonify({"error": "queue_unavailable", "message": "job queue is unavailable, try again later"}), 503

@jobs_bp.post("/api/brute_force/submit")
def attack_submit():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    attack = str(data.get("attack", "brute_force"))
    if attack not in JOB_KINDS:
        return jsonify({"error": f"attack must be one of {list(JOB_KINDS)}"}), 400
    try:
        e, n, c = check_public_inputs(data.get("e"), data.get("n"), data.get("c"))
    except AttackError as exc:
        return jsonify(exc.to_dict()), 400
    if attack == "factoring":
        if n.bit_length() > settings.factoring_job_max_bits:
            return jsonify({"error": "too_large",
                            "message": f"n above {settings.factoring_job_max_bits} bits is not accepted for factoring jobs"}), 400
    elif n > settings.brute_force_job_max_n:
        return jsonify({"error": "too_large",
                        "message": f"n above {settings.brute_force_job_max_n} is not accepted for brute force jobs"}), 400

    ip = client_ip()
    if not ip_can_start(ip):
        return jsonify({"error": "One active job per IP. Wait or cancel the running job."}), 429

    job = attack_q.enqueue("attack_worker.attack_job", attack, str(e), str(n), str(c),
                           meta={"attack": attack, "bits": n.bit_length(), "ip": ip, "submitted": time.time()})
    ids = attack_q.get_job_ids()
    pos = ids.index(job.id) + 1 if job.id in ids else 1
    logger.info("queued job %s attack=%s bits=%d pos=%d", job.id, attack, n.bit_length(), pos)
    return jsonify({"job_id": job.id, "status": job.get_status(), "bits": n.bit_length(), "queue_position": pos})

@jobs_bp.get("/api/job/<job_id>")
def job_status(job_id):
    try:
        job = Job.fetch(job_id, connection=redis_conn)
    except NoSuchJobError:
        return jsonify({"error": "unknown job"}), 404
    return jsonify(_job_dict(job))

@jobs_bp.post("/api/job/<job_id>/abort")
def job_abort(job_id):
    try:
        job = Job.fetch(job_id, connection=redis_conn)
    except NoSuchJobError:
        return jsonify({"error": "unknown job"}), 404
    if job.get_status() == "started":
        from rq.command import send_stop_job_command
        send_stop_job_command(redis_conn, job_id)
    job.cancel()
    logger.info("aborted job %s", job_id)
    return jsonify({"ok": True, "job_id": job_id, "status": job.get_status()})
