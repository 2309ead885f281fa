# attack_worker.py
# RQ job entry point for long attacks. Run a worker with
#   python attack_worker.py            (or: rq worker attacks)

import logging

from rsattack.harness import ATTACKS, compare, run_attack

logger = logging.getLogger(__name__)

COMPARE = "compare"


def attack_job(attack, e, n, c):
    """
    Executed inside the RQ worker.
    Returns the JSON-ready dict of an AttackResult, or of a Comparison for
    attack="compare". Attack errors are part of the result, not job failures.
    """
    e, n, c = int(e), int(n), int(c)
    logger.info("job start attack=%s bits=%d", attack, n.bit_length())
    if attack == COMPARE:
        out = compare(e, n, c).to_dict()
    else:
        out = run_attack(attack, e, n, c).to_dict()
    logger.info("job done attack=%s", attack)
    return out


JOB_KINDS = tuple(sorted(ATTACKS)) + (COMPARE,)


def _main():
    from redis import Redis
    from rq import Queue, Worker

    from rsattack.config import Settings
    from rsattack.logs import configure_logging

    cfg = Settings.from_env()
    configure_logging(cfg.log_level)
    conn = Redis.from_url(cfg.redis_url)
    Worker([Queue(cfg.queue_name, connection=conn)], connection=conn).work()


if __name__ == "__main__":
    _main()
