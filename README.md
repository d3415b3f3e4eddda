# memex

Building blocks for running a command-line coding assistant alongside a
question/answer memory service: data types for choosing which stored answers to
show the assistant, an async client for the service, prompt rendering, replay
reports and the pieces of a runner's control loop.

## What is in the package

- `memex.gatekeeper_config` – `GatekeeperConfig`, the thresholds for choosing
  items to inject (`max_inject`, `min_level_inject`, `min_trust_show`,
  `skip_if_top1_score_ge`, `active_statuses`, ...).
- `memex.decision` – `SearchMatch`, `InjectItem`, `HitRef`, `ValidatePlan`,
  `TaskGradeResult` and `GatekeeperDecision`. `SearchMatch.to_inject_item()`
  gives the injectable view of a match; `GatekeeperDecision.to_dict()` gives a
  JSON-ready dictionary.
- `memex.corr_reasons` – `ToolCorrStats`, `CorrelationStats` and
  `summarize_tool_corr_anomalies`, which turns tool request/result correlation
  counts into readable reason lines, worst tools first.
- `memex.qa_refs` – `extract_qa_refs(text)` returns the distinct, sorted ids of
  the `[QA_REF <id>]` anchors found in assistant output.
- `memex.memory_models` – request payloads `QASearchPayload`,
  `QAReferencePayload`, `QAHitsPayload`, `QACandidatePayload` and
  `QAValidationPayload`, each with `to_dict()`; unset optional fields are left
  out.
- `memex.memory_types` – `CandidateDraft`, `InjectPlacement`, `InjectConfig`
  and `CandidateExtractConfig`.
- `memex.text_utils` – `one_line`, `truncate_clean` and `trim_mid`.
- `memex.payloads` – `build_hit_payload`, `build_validate_payloads` and
  `build_candidate_payloads` turn a `GatekeeperDecision` or drafts into service
  payloads.
- `memex.render` – `render_memory_context(items, cfg)` renders a
  `[MEMORY_CONTEXT v1]` block; `merge_prompt(user_query, memory_context)`
  puts it in front of the query.
- `memex.client` – `MemoryClient(base_url, api_key, timeout_ms)`, an async
  client posting JSON to `/v1/qa/search`, `/v1/qa/hit`, `/v1/qa/candidates`,
  `/v1/qa/validate` and `/v1/task/grade`. Each method returns the decoded JSON
  response. A non-blank `api_key` is sent as a bearer token. Use it as an async
  context manager or call `aclose()`.
- `memex.replay_model`, `memex.replay_diff`, `memex.report` – `ReplayRun`,
  `diff_gatekeeper_decision(baseline, rerun)` returning a `DecisionDiff`, and
  `build_report(runs)` / `format_text(report)` for summarising replayed runs.
- `memex.runner_types` – `RunOutcome`, `Signal`, `PolicyAction`,
  `RunnerStartArgs`, `RunnerResult`, `RunnerEvent`, and the abstract bases
  `RunnerSession`, `RunnerPlugin` and `PolicyPlugin`.
- `memex.policy` – `PolicyEngine` decides each `tool.request` once through a
  `PolicyPlugin` and puts a `policy.decision` message on the control queue;
  `policy_decision_command` builds that message.
- `memex.abort` – `abort_command` and `abort_sequence`, which sends a
  `control.abort` message, waits the grace period and kills the session.
- `memex.control` – `spawn_control_writer` starts an asyncio task that writes
  queued messages to a child's stdin as JSON lines (`encode_control_line`);
  put `None` on the queue to stop it.
- `memex.io_pump` – `pump(reader, ring, line_queue, stream)` copies a stream
  into a `TailBuffer` and queues each line as a `LineTap`. Setting
  `MEMEX_FLOW_AUDIT` to a non-empty value other than `0` logs each line to the
  `memex.flow` logger.

## What it does not do

- It does not evaluate a gatekeeper decision from search matches; it only
  carries the data in and out.
- It does not parse raw search responses into `SearchMatch` objects;
  `MemoryClient.search` returns the JSON as received.
- It does not read recorded event files or apply `key=value` overrides to a
  `GatekeeperConfig`; build `ReplayRun` objects and adjust the dataclass
  yourself.
- It has no runner main loop, no concrete `RunnerSession` or `RunnerPlugin`,
  and no command-line program.

## Install

```
pip install .
pip install ".[test]"   # with test dependencies
```

## Example

```python
import asyncio
from memex.client import MemoryClient
from memex.memory_models import QASearchPayload

async def main():
    async with MemoryClient("http://localhost:8080", "placeholder", 5000) as client:
        raw = await client.search(
            QASearchPayload(project_id="demo", query="cargo build fails", limit=5, min_score=0.2)
        )
        print(raw)

asyncio.run(main())
```

Rendering matches for a prompt:

```python
from memex.decision import SearchMatch
from memex.memory_types import InjectConfig
from memex.render import render_memory_context, merge_prompt
from memex.qa_refs import extract_qa_refs

matches = [SearchMatch(qa_id="qa-1", question="Build fails?", answer="Run cargo clean.",
                       validation_level=2, trust=0.9, score=0.7)]
items = [m.to_inject_item() for m in matches]
prompt = merge_prompt("fix the build", render_memory_context(items, InjectConfig()))

extract_qa_refs("Done. [QA_REF qa-1]")   # ['qa-1']
```

## Tests

```
pytest
```