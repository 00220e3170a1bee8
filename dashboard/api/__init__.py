# dashboard/api
