"""Workflow instruction bodies.

Each workflow has one body shared by its skill and its slash command. Bodies
reference other workflows as /opsx:<id>; tools with a different command
syntax rewrite those references at formatting time.
"""

from openspec.templates.types import CommandTemplate, SkillTemplate

_PROPOSE = """\
Propose a new change and generate all of its artifacts in one step.

I'll create a change with:
- proposal.md (what and why)
- design.md (how)
- tasks.md (implementation steps)

When ready to implement, run /opsx:apply

---

**Input**: A change name (kebab-case) or a description of what to build.

**Steps**

1. **If no clear input was provided, ask what the user wants to build.**
   Derive a kebab-case name from the description
   (e.g. "add user authentication" becomes `add-user-auth`).

2. **Create the change directory**
   ```bash
   openspec new change "<name>"
   ```

3. **Get the artifact build order**
   ```bash
   openspec status --change "<name>" --json
   ```

4. **Create artifacts in dependency order until the change is apply-ready.**
   For each ready artifact, fetch its instructions with
   `openspec instructions <artifact-id> --change "<name>" --json` and write it.

5. **Show the final status** and suggest /opsx:apply.

**Guardrails**
- Do not write implementation code while proposing.
- If context is unclear, ask before creating artifacts.
"""

_EXPLORE = """\
Enter explore mode. Think deeply. Follow the conversation wherever it goes.

**Explore mode is for thinking, not implementing.** You may read files, search
code and investigate the codebase, but you must never write application code.
If the user asks you to implement something, suggest /opsx:propose or
/opsx:new first. Creating OpenSpec artifacts (proposals, designs, specs) is
allowed when asked; that is capturing thinking, not implementing.

## The Stance

- **Curious, not prescriptive**: ask questions that emerge naturally
- **Visual**: use ASCII diagrams when they clarify thinking
- **Grounded**: explore the actual codebase, don't just theorize

## OpenSpec Awareness

Check existing context at the start:
```bash
openspec list --json
```

If a change is active, read its proposal, design and tasks before discussing.
When the discussion crystallizes, offer to capture it as a change.
"""

_NEW = """\
Start a new change using the artifact-driven workflow.

**Input**: A change name (kebab-case) or a description of what to build.

**Steps**

1. **If no clear input was provided, ask what the user wants to build.**

2. **Create the change directory**
   ```bash
   openspec new change "<name>"
   ```

3. **Show the artifact status**
   ```bash
   openspec status --change "<name>"
   ```

4. **Show the instructions for the first artifact** and stop.

**Output**: The change name, its location, and a prompt to continue with
/opsx:continue.

**Guardrails**
- Do not create any artifacts yet; only scaffold the change.
- If a change with that name already exists, suggest /opsx:continue instead.
"""

_CONTINUE = """\
Continue working on a change by creating the next artifact.

**Input**: Optionally a change name. If omitted, infer it from context or ask.

**Steps**

1. **Check the current status**
   ```bash
   openspec status --change "<name>" --json
   ```

2. **If all artifacts are complete**, congratulate the user and suggest
   /opsx:apply.

3. **Otherwise pick the first ready artifact** and fetch its instructions:
   ```bash
   openspec instructions <artifact-id> --change "<name>" --json
   ```

4. **Create exactly one artifact** following the instructions and template,
   then show the updated status.

**Guardrails**
- Create one artifact per invocation.
- Read dependency artifacts before writing a new one.
"""

_APPLY = """\
Implement tasks from an OpenSpec change.

**Input**: Optionally a change name. If omitted, infer it from context or ask.

**Steps**

1. **Get the apply instructions**
   ```bash
   openspec instructions apply --change "<name>" --json
   ```
   If the change is blocked on missing artifacts, suggest /opsx:continue.

2. **Read the context files** listed in the instructions.

3. **Implement tasks in order.** For each task:
   - Make the code changes it describes
   - Mark it complete in tasks.md: `- [ ]` becomes `- [x]`

4. **Pause when** a task is unclear, the implementation reveals a design
   issue, or an error blocks progress.

5. **When every task is done**, suggest /opsx:verify or /opsx:archive.

**Guardrails**
- Keep changes minimal and scoped to each task.
- Update the design artifact if the implementation diverges from it.
"""

_ARCHIVE = """\
Archive a completed change.

**Input**: Optionally a change name. If omitted, infer it from context or ask.

**Steps**

1. **Check artifact and task completion**
   ```bash
   openspec status --change "<name>" --json
   ```
   Warn about incomplete artifacts or unchecked tasks and confirm before
   continuing.

2. **Sync delta specs** into the main specs when the change has any.

3. **Move the change** to `openspec/changes/archive/YYYY-MM-DD-<name>/`.

4. **Summarize** what was archived and whether specs were synced.

**Guardrails**
- Never archive without confirmation when work is incomplete.
- Preserve `.openspec.yaml` when moving the change.
"""

_VERIFY = """\
Verify that an implementation matches its change artifacts.

**Input**: Optionally a change name. If omitted, infer it from context or ask.

**Steps**

1. **Load the change artifacts** (proposal, specs, design, tasks).

2. **Check completeness**: every task is checked and every requirement has
   corresponding code.

3. **Check correctness**: implementation behavior matches each scenario in
   the delta specs.

4. **Check coherence**: the implementation follows decisions in design.md.

5. **Report** issues grouped as CRITICAL, WARNING and SUGGESTION, then
   recommend /opsx:archive when nothing critical remains.

**Guardrails**
- Report only; do not fix issues during verification.
"""


def get_propose_skill_template() -> SkillTemplate:
    return SkillTemplate(
        name="openspec-propose",
        description=(
            "Propose a new change with all artifacts generated in one step. "
            "Use when the user wants to quickly describe what to build and get "
            "a complete proposal ready for implementation."
        ),
        instructions=_PROPOSE,
    )


def get_propose_command_template() -> CommandTemplate:
    return CommandTemplate(
        name="OPSX: Propose",
        description="Propose a new change - create it and generate all artifacts in one step",
        category="Workflow",
        tags=("workflow", "artifacts", "experimental"),
        content=_PROPOSE,
    )


def get_explore_skill_template() -> SkillTemplate:
    return SkillTemplate(
        name="openspec-explore",
        description=(
            "Enter explore mode - a thinking partner for exploring ideas, "
            "investigating problems and clarifying requirements."
        ),
        instructions=_EXPLORE,
    )


def get_explore_command_template() -> CommandTemplate:
    return CommandTemplate(
        name="OPSX: Explore",
        description="Enter explore mode - think through ideas and clarify requirements",
        category="Workflow",
        tags=("workflow", "explore", "experimental", "thinking"),
        content=_EXPLORE,
    )


def get_new_change_skill_template() -> SkillTemplate:
    return SkillTemplate(
        name="openspec-new-change",
        description=(
            "Start a new OpenSpec change using the artifact workflow. "
            "Use when the user wants to create a new feature, fix or modification."
        ),
        instructions=_NEW,
    )


def get_new_command_template() -> CommandTemplate:
    return CommandTemplate(
        name="OPSX: New",
        description="Start a new change using the artifact workflow",
        category="Workflow",
        tags=("workflow", "artifacts", "experimental"),
        content=_NEW,
    )


def get_continue_change_skill_template() -> SkillTemplate:
    return SkillTemplate(
        name="openspec-continue-change",
        description=(
            "Continue working on an OpenSpec change by creating the next artifact. "
            "Use when the user wants to progress a change step by step."
        ),
        instructions=_CONTINUE,
    )


def get_continue_command_template() -> CommandTemplate:
    return CommandTemplate(
        name="OPSX: Continue",
        description="Continue working on a change - create the next artifact",
        category="Workflow",
        tags=("workflow", "artifacts", "experimental"),
        content=_CONTINUE,
    )


def get_apply_change_skill_template() -> SkillTemplate:
    return SkillTemplate(
        name="openspec-apply-change",
        description=(
            "Implement tasks from an OpenSpec change. "
            "Use when the user wants to start implementing or continue implementation."
        ),
        instructions=_APPLY,
    )


def get_apply_command_template() -> CommandTemplate:
    return CommandTemplate(
        name="OPSX: Apply",
        description="Implement tasks from an OpenSpec change",
        category="Workflow",
        tags=("workflow", "artifacts", "experimental"),
        content=_APPLY,
    )


def get_archive_change_skill_template() -> SkillTemplate:
    return SkillTemplate(
        name="openspec-archive-change",
        description=(
            "Archive a completed change. "
            "Use when the user wants to finalize and archive a change after implementation."
        ),
        instructions=_ARCHIVE,
    )


def get_archive_command_template() -> CommandTemplate:
    return CommandTemplate(
        name="OPSX: Archive",
        description="Archive a completed change",
        category="Workflow",
        tags=("workflow", "archive", "experimental"),
        content=_ARCHIVE,
    )


def get_verify_change_skill_template() -> SkillTemplate:
    return SkillTemplate(
        name="openspec-verify-change",
        description=(
            "Verify an implementation matches its change artifacts. "
            "Use before archiving to confirm completeness, correctness and coherence."
        ),
        instructions=_VERIFY,
    )


def get_verify_command_template() -> CommandTemplate:
    return CommandTemplate(
        name="OPSX: Verify",
        description="Verify implementation matches change artifacts before archiving",
        category="Workflow",
        tags=("workflow", "verify", "experimental"),
        content=_VERIFY,
    )
