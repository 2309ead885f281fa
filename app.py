import logging
from flask import Flask, request, jsonify, render_template_string
from redis.exceptions import RedisError
from sympy import isprime

from attack_api import jobs_bp, redis_conn, settings
from rsattack.errors import AttackError
from rsattack.harness import BRUTE_FORCE, FACTORING, compare, run_attack
from rsattack.logs import configure_logging
from rsattack.numeric import check_public_inputs

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.register_blueprint(jobs_bp)

PAGE = """<!doctype html><html><head>
<meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>RSA Attack Time Comparison</title>
<style>
body{font-family:system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,Helvetica,Arial,sans-serif;margin:0;background:#fafafa;color:#111}
.wrap{max-width:860px;margin:40px auto;padding:0 16px}
.card{background:#fff;border:1px solid #eee;border-radius:12px;padding:16px;margin:18px 0}
label{font-size:12px;color:#555}input,button{font-size:14px;padding:10px;border-radius:8px;border:1px solid #d0d0d0}
input{width:100%;box-sizing:border-box}button{background:#111;color:#fff;cursor:pointer;margin-right:6px}
.grid{display:grid;grid-template-columns:1fr 1fr 1fr;gap:10px}.mono{font-family:ui-monospace,Menlo,Consolas,monospace}
pre{white-space:pre-wrap;word-break:break-all;background:#f6f6f6;border:1px solid #eee;border-radius:8px;padding:10px}
.note{color:#555;font-size:12px}
</style></head><body><div class="wrap">
<h1>RSA Attack Time Comparison</h1>
<div class="card">
  <div class="grid">
    <div><label>e (encryption exponent)</label><input id="e" class="mono" value="17"/></div>
    <div><label>N (modulus)</label><input id="n" class="mono" value="3233"/></div>
    <div><label>C (ciphertext)</label><input id="c" class="mono" value="2790"/></div>
  </div>
  <div style="margin-top:8px">
    <button data-url="/api/brute_force">Attack 1: Brute Force M</button>
    <button data-url="/api/factoring">Attack 2: Factor N</button>
    <button data-url="/api/compare">Compare</button>
  </div>
  <div class="note">Synchronous brute force is limited to N &le; {{MAX_N}}.</div>
  <pre id="out">&ndash;</pre>
</div>
</div>
<script>
async function post(url,p){const r=await fetch(url,{method:'POST',headers:{'Content-Type':'application/json'},body:JSON.stringify(p)});return await r.json();}
document.querySelectorAll('button[data-url]').forEach(b=>b.onclick=async()=>{
  const v=id=>(document.querySelector('#'+id).value||'').trim();
  const out=document.querySelector('#out');out.textContent='Running…';
  try{out.textContent=JSON.stringify(await post(b.dataset.url,{e:v('e'),n:v('n'),c:v('c')}),null,2);}catch(e){out.textContent='Error: '+e;}
});
</script></body></html>"""


def _read_inputs():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        data = {}
    return check_public_inputs(data.get("e"), data.get("n"), data.get("c"))


# malformed request -> 400, well-formed key the attack cannot answer -> 422
_CLIENT_ERRORS = ("invalid_integer", "division_by_zero")


def _status(kind: str) -> int:
    return 400 if kind in _CLIENT_ERRORS else 422


def _error(exc: AttackError):
    return jsonify(exc.to_dict()), _status(exc.kind)


def _too_large(n: int):
    if n > settings.brute_force_sync_max_n:
        return jsonify(error="too_large",
                       message=f"n above {settings.brute_force_sync_max_n}: submit a job to /api/brute_force/submit"), 400
    return None


def _factoring_too_large(n: int):
    if n.bit_length() > settings.factoring_sync_max_bits:
        return jsonify(error="too_large",
                       message=f"n above {settings.factoring_sync_max_bits} bits: submit a factoring job to /api/brute_force/submit"), 400
    return None


def _result_response(res):
    if res.ok:
        return jsonify(res.to_dict())
    return jsonify(res.to_dict()), _status(res.error)


@app.get("/")
def home():
    return render_template_string(PAGE.replace("{{MAX_N}}", str(settings.brute_force_sync_max_n)))


@app.post("/api/factoring")
def api_factoring():
    try:
        e, n, c = _read_inputs()
    except AttackError as exc:
        return _error(exc)
    refused = _factoring_too_large(n)
    if refused:
        return refused
    res = run_attack(FACTORING, e, n, c)
    resp = res.to_dict()
    if res.ok:
        resp["is_p_prime"] = bool(isprime(res.factors.p))
        resp["is_q_prime"] = bool(isprime(res.factors.q))
        return jsonify(resp)
    return _result_response(res)


@app.post("/api/brute_force")
def api_brute_force():
    try:
        e, n, c = _read_inputs()
    except AttackError as exc:
        return _error(exc)
    refused = _too_large(n)
    if refused:
        return refused
    return _result_response(run_attack(BRUTE_FORCE, e, n, c))


@app.post("/api/compare")
def api_compare():
    try:
        e, n, c = _read_inputs()
    except AttackError as exc:
        return _error(exc)
    refused = _too_large(n)
    if refused:
        return refused
    cmp = compare(e, n, c)
    logger.info("compare bits=%d agree=%s speedup=%s", n.bit_length(), cmp.agree, cmp.speedup)
    return jsonify(cmp.to_dict())


@app.get("/api/health")
def api_health():
    try:
        redis_ok = bool(redis_conn.ping())
    except RedisError as exc:
        logger.warning("redis ping failed: %s", exc.__class__.__name__)
        redis_ok = False
    return jsonify(ok=True, redis=redis_ok, queue=settings.queue_name)


if __name__ == "__main__":
    configure_logging(settings.log_level)
    app.run("127.0.0.1", 8082, debug=True)
