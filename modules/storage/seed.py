from modules.dashboard.models import InsertCardSchema, InsertDashboardSchema, InsertUserSchema
from modules.logger import ProvisionedLogger, TimeLogger

from .base import DashboardStorage

logger = ProvisionedLogger().provision("Demo Data")

DEMO_USERNAME = "demo"

def __demo_cards(dashboard_id: int)->list[InsertCardSchema]:
  # ``i`` is overwritten by storage, so the placeholder doesn't matter.
  raw_cards = [
    dict(
      title="Monthly Revenue",
      type="chart",
      config=dict(type="chart", config=dict(chartType="bar", dataSource="/api/data/monthly-revenue", showLegend=True)),
      layout=dict(i="new", x=0, y=0, w=4, h=2, minW=2, minH=2),
    ),
    dict(
      title="Total Users",
      type="stats",
      config=dict(type="stats", config=dict(value="8,492", change=12.5, changeType="increase", icon="users")),
      layout=dict(i="new", x=4, y=0, w=3, h=1, minW=2, minH=1),
    ),
    dict(
      title="Conversion Rate",
      type="stats",
      config=dict(type="stats", config=dict(value="4.28%", change=-1.2, changeType="decrease", icon="badge-check")),
      layout=dict(i="new", x=7, y=0, w=3, h=1, minW=2, minH=1),
    ),
    dict(
      title="Top Products",
      type="table",
      config=dict(type="table", config=dict(
        columns=[
          dict(key="product", label="Product"),
          dict(key="sales", label="Sales"),
          dict(key="revenue", label="Revenue", type="currency"),
          dict(key="growth", label="Growth", type="change"),
        ],
        dataSource="/api/data/top-products",
      )),
      layout=dict(i="new", x=4, y=1, w=6, h=2, minW=4, minH=2),
    ),
    dict(
      title="Recent Activity",
      type="list",
      config=dict(type="list", config=dict(dataSource="/api/data/recent-activity", showIcons=True, maxItems=10)),
      layout=dict(i="new", x=0, y=2, w=4, h=2, minW=2, minH=2),
    ),
    dict(
      title="Traffic Sources",
      type="chart",
      config=dict(type="chart", config=dict(chartType="pie", dataSource="/api/data/traffic-sources", showLegend=True)),
      layout=dict(i="new", x=4, y=3, w=5, h=2, minW=3, minH=2),
    ),
  ]
  return [InsertCardSchema.model_validate(dict(**card, dashboardId=dashboard_id)) for card in raw_cards]

def seed_demo_data(storage: DashboardStorage):
  """Populates storage with a demo user, three dashboards, and a handful of cards on the first dashboard.
  Users and dashboards are only created if there are none yet."""
  with TimeLogger(logger, "Seeding demo data", report_start=True):
    user = storage.get_user_by_username(DEMO_USERNAME)
    if user is None:
      user = storage.create_user(InsertUserSchema(username=DEMO_USERNAME, password="demo123"))
      logger.info(f"Created demo user \"{user.username}\" with ID {user.id}")

    if len(storage.get_dashboards()) > 0:
      logger.info("Skipping demo dashboards as there are existing dashboards.")
      return

    analytics_dashboard = storage.create_dashboard(InsertDashboardSchema(
      title="Analytics Dashboard",
      description="Key performance metrics and analytics for your business",
      user_id=user.id,
    ))
    storage.create_dashboard(InsertDashboardSchema(
      title="Project Metrics",
      description="Track your project progress and KPIs",
      user_id=user.id,
    ))
    storage.create_dashboard(InsertDashboardSchema(
      title="Custom Dashboard",
      description="Your personalized dashboard for custom metrics",
      user_id=user.id,
    ))

    for card in __demo_cards(analytics_dashboard.id):
      storage.create_card(card)
    logger.info(f"Created demo dashboards. \"{analytics_dashboard.title}\" has ID {analytics_dashboard.id}")

__all__ = [
  "seed_demo_data",
  "DEMO_USERNAME",
]
