"""Fixed texts used by the conversation engine and local inference."""

SYSTEM_PROMPT = """You are the Personaliz Desktop Assistant, powered by OpenClaw.
You guide non-technical users through automation with plain English.
You translate user intent into OpenClaw CLI actions.
You execute commands silently but explain what you're doing.
You always ask for confirmation before any public posting.
You log every action clearly.
Be friendly, concise, and helpful. Use emojis sparingly.

Capabilities you can help with:
- Setting up OpenClaw on the user's computer
- Creating automation agents (content, monitoring, scheduling)
- Managing cron schedules
- Browser automation for LinkedIn posting
- Configuring event handlers and heartbeat checks
- Running in sandbox (dry-run) mode for safety

When a user asks to create an agent, gather these details:
1. Agent name
2. Role (e.g., "Content Creator", "Community Manager")
3. Goal (what should the agent accomplish)
4. Tools needed (browser, cron, etc.)
5. Schedule (cron expression or description)
6. Whether sandbox mode should be enabled"""

WELCOME_MESSAGE = """👋 Welcome to **OpenClaw Desktop Assistant**! 🦞

I'm here to help you automate tasks without using the command line. Here's what I can do:

- 🔧 **"Setup OpenClaw"** — Install and configure everything
- 🤖 **"Create an agent"** — Build automations via chat
- 📈 **"Create trending agent"** — LinkedIn trending topics agent
- #️⃣ **"Create hashtag agent"** — #openclaw comment agent
- ⏰ **"Schedule a task"** — Set up cron jobs
- 🧪 **"Enable sandbox mode"** — Test safely
- ❓ **"Help"** — See all commands

Just type naturally and I'll guide you through everything!"""

SETUP_PREVIEW = """🦞 Let's get OpenClaw set up on your system! Here's what I'll do:

1. **Check your system** — Detect OS and verify Node.js is installed
2. **Install OpenClaw** — Run `npm install -g openclaw@latest` in the background
3. **Run onboarding** — Execute `openclaw onboard` to configure everything
4. **Start the Gateway** — Launch the OpenClaw gateway service

Would you like me to start the setup process? Just say **"Yes"** to begin!

💡 Tip: You can also go to **Settings** to enter an API key for a more powerful AI model."""

AGENT_CREATED = """✅ **Agent Created Successfully!**

🤖 **{name}** is now ready.
- Role: {role}
- Schedule: `{schedule}`
- Sandbox: {sandbox}

You can view and manage it in the **Agents** tab. Head over there to run it, or tell me if you'd like to make any changes!"""

AGENT_CREATION_FAILED = (
    "❌ Failed to create agent: {error}. Please try again or use the Agents tab directly."
)

TURN_FAILED = "⚠️ Something went wrong while handling that: {error}. Please try again."

AGENT_CREATION_GUIDE = """🤖 Let's create a new agent! I'll need a few details:

1. **Agent Name** — What should we call this agent?
2. **Role** — e.g., "Content Creator", "Community Manager", "Monitor"
3. **Goal** — What should this agent accomplish?
4. **Tools** — Which tools does it need? (browser, cron, etc.)
5. **Schedule** — How often should it run? (e.g., "daily at 9am", "every hour")
6. **Sandbox Mode** — Should we test in dry-run mode first?

You can provide these details here in chat, or head over to the **Agents** tab to use the visual form!"""

TRENDING_PREVIEW = """📈 Great idea! I'll help you create a **Trending Topics Agent**. Here's the plan:

**Agent: Trending OpenClaw Topics → LinkedIn Post**
- 🔍 Search for trending OpenClaw topics
- ✍️ Write a compelling LinkedIn post
- ✋ Wait for your approval in the app
- 🌐 Post via browser automation
- 🔄 Runs daily at 9:00 AM

**Config Preview:**
```json
{
  "name": "Trending Topics Agent",
  "role": "Content Creator",
  "goal": "Search trending OpenClaw topics, write LinkedIn post",
  "tools": ["browser", "cron"],
  "schedule": "0 9 * * *",
  "requireApproval": true
}
```

Would you like me to create this agent? Say **"Yes, create it"** to deploy!"""

HASHTAG_PREVIEW = """#️⃣ I'll set up a **Hashtag Comment Agent** for you!

**Agent: #openclaw Promoter**
- 🔎 Search LinkedIn for posts with #openclaw
- 💬 Comment promoting your GitHub repo & desktop app
- 🔄 Runs every hour automatically
- 📊 Logs all executions

**Config Preview:**
```json
{
  "name": "Hashtag Promoter",
  "role": "Community Promoter",
  "goal": "Search #openclaw, comment & promote desktop app",
  "tools": ["browser", "cron"],
  "schedule": "0 */1 * * *",
  "requireApproval": false
}
```

Shall I create this agent? Say **"Yes, create it"** to deploy! You can enable sandbox mode later."""

SCHEDULE_HELP = """⏰ I can help you manage schedules! Here are your options:

- **View Schedules** — Go to the Schedules tab to see all active jobs
- **Create Schedule** — Tell me what you want to run and when
- **Cron Expressions** — I can translate plain English to cron:
  - "Every day at 9am" → `0 9 * * *`
  - "Every hour" → `0 */1 * * *`
  - "Every Monday at 8am" → `0 8 * * 1`
  - "Every 30 minutes" → `*/30 * * * *`

What would you like to schedule?"""

SANDBOX_HELP = """🧪 **Sandbox Mode** keeps you safe!

When sandbox mode is enabled for an agent:
- ✅ All actions are simulated (no real posting/commenting)
- ✅ Browser automation runs but doesn't submit forms
- ✅ Full logs are generated for review
- ✅ You can verify everything works before going live

To enable sandbox mode:
1. Go to **Agents** tab
2. Toggle **Sandbox Mode** on for any agent
3. Run the agent to test

Or tell me which agent you'd like to put in sandbox mode!"""

HELP = """🦞 Hi! I'm your **OpenClaw Desktop Assistant**. Here's what I can help with:

🔧 **Setup & Config**
- "Setup OpenClaw" — Install and configure everything
- "Check status" — View system and gateway status

🤖 **Agent Management**
- "Create an agent" — Build a new automation agent
- "Create trending agent" — Set up LinkedIn trending topics agent
- "Create hashtag agent" — Set up #openclaw comment agent

⏰ **Scheduling**
- "Schedule a task" — Set up cron jobs
- "Show schedules" — View active schedules

🧪 **Safety**
- "Enable sandbox mode" — Test agents safely
- "Show approval queue" — Review pending actions

⚙️ **Settings**
- "Switch to OpenAI" — Configure your API key
- "Use local model" — Switch back to Phi-3

Just type naturally and I'll guide you through everything!"""

STATUS = """📊 **System Status Check**

| Component | Status |
|-----------|--------|
| Desktop App | ✅ Running |
| OpenClaw CLI | Checking... |
| Gateway | Checking... |
| Local LLM | ✅ Active (Phi-3) |
| Database | ✅ Connected |

💡 Head to **Settings** to configure your LLM API key for enhanced responses."""

GREETING = """👋 Hello! I'm your **OpenClaw Desktop Assistant** 🦞

I'm here to help you automate tasks without touching the command line. Here are some things you can try:

- **"Setup OpenClaw"** — Get everything installed
- **"Create an agent"** — Build your first automation
- **"Help"** — See all my capabilities

What would you like to do today?"""

FALLBACK = """🦞 I understand you want to: "{message}"

Let me help with that! Here's what I can do:
- If you need **automation**, I can create an agent for that
- If you need **scheduling**, I can set up a cron job
- If you need **browser actions**, I can configure browser automation

Could you tell me more about what you'd like to accomplish? I'll break it down into simple steps.

💡 **Quick tip:** You can also use the tabs on the left to directly manage Agents, Schedules, and Logs."""
