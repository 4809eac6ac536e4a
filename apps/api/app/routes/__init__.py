from . import ai, content, dashboard, prospects, tc3d, ventures

ROUTERS = (
    ventures.router,
    content.router,
    prospects.router,
    tc3d.router,
    dashboard.router,
    ai.router,
)
